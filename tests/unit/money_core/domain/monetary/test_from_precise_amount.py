from __future__ import annotations

import pytest

from money_core.domain.monetary.currency_registry import EUR, JPY
from money_core.domain.monetary.high_precision_money import MAX_FRACTION_DIGITS, MAX_PRECISE_AMOUNT, MIN_PRECISE_AMOUNT, HighPrecisionMoney
from money_core.utils.validated import Invalid, Valid


class TestFromPreciseAmount:
    def test_valid_without_cent_amount_derives_half_even(self):
        result = HighPrecisionMoney.from_precise_amount(123456, 4, EUR)

        assert isinstance(result, Valid)
        hp = result.get_or_raise()
        assert str(hp.amount) == "12.3456"
        assert hp.cent_amount == 1235
        assert hp.precise_amount == 123456

    def test_half_cent_rounds_to_even(self):
        assert HighPrecisionMoney.from_precise_amount(1005, 3, EUR).get_or_raise().cent_amount == 100
        assert HighPrecisionMoney.from_precise_amount(1015, 3, EUR).get_or_raise().cent_amount == 102

    @pytest.mark.parametrize("cent_amount", [1234, 1235])
    def test_explicit_cent_amount_within_floor_and_ceiling(self, cent_amount):
        hp = HighPrecisionMoney.from_precise_amount(123456, 4, EUR, cent_amount).get_or_raise()

        assert hp.cent_amount == cent_amount

    def test_negative_amount_range(self):
        hp = HighPrecisionMoney.from_precise_amount(-123456, 4, EUR, cent_amount=-1235).get_or_raise()

        assert hp.cent_amount == -1235

    def test_cent_amount_out_of_range(self):
        result = HighPrecisionMoney.from_precise_amount(123456, 4, EUR, cent_amount=1236)

        assert result == Invalid(("centAmount must be correctly rounded preciseAmount (a number between 1234 and 1235).",))
        assert not result.is_valid

    def test_fraction_digits_equal_to_currency_default_rejected(self):
        result = HighPrecisionMoney.from_precise_amount(1234, 2, EUR)

        assert result == Invalid(("fractionDigits must be > 2 (default fraction digits defined by currency EUR).",))

    def test_fraction_digits_above_maximum_rejected(self):
        assert MAX_FRACTION_DIGITS == 20
        assert HighPrecisionMoney.from_precise_amount(1, 20, EUR).is_valid

        result = HighPrecisionMoney.from_precise_amount(1, 21, EUR)
        assert result == Invalid(("fractionDigits must be <= 20.",))

    def test_all_errors_reported_together(self):
        result = HighPrecisionMoney.from_precise_amount(1, 21, EUR, cent_amount=5)

        assert isinstance(result, Invalid)
        assert result.errors == (
            "fractionDigits must be <= 20.",
            "centAmount must be correctly rounded preciseAmount (a number between 0 and 1).",
        )

        result = HighPrecisionMoney.from_precise_amount(1234, 2, EUR, cent_amount=1300)
        assert len(result.errors) == 2

    def test_precise_amount_bounds_are_signed_64_bit(self):
        assert HighPrecisionMoney.from_precise_amount(MAX_PRECISE_AMOUNT, 4, EUR).is_valid
        assert HighPrecisionMoney.from_precise_amount(MIN_PRECISE_AMOUNT, 4, EUR).is_valid

    @pytest.mark.parametrize("precise_amount", [10**35 + 1, -(10**35), MAX_PRECISE_AMOUNT + 1, MIN_PRECISE_AMOUNT - 1])
    def test_precise_amount_out_of_range_is_reported_not_raised(self, precise_amount):
        result = HighPrecisionMoney.from_precise_amount(precise_amount, 4, EUR)

        assert result == Invalid(("preciseAmount must be between -9223372036854775808 and 9223372036854775807.",))

    def test_precise_amount_out_of_range_collected_with_other_errors(self):
        result = HighPrecisionMoney.from_precise_amount(10**40, 21, EUR, cent_amount=5)

        assert result.errors == (
            "fractionDigits must be <= 20.",
            "preciseAmount must be between -9223372036854775808 and 9223372036854775807.",
        )

    def test_zero_fraction_digit_currency(self):
        hp = HighPrecisionMoney.from_precise_amount(125, 1, JPY).get_or_raise()

        assert str(hp.amount) == "12.5"
        assert hp.cent_amount == 12

    def test_get_or_raise_on_invalid(self):
        with pytest.raises(ValueError, match="fractionDigits must be <= 20"):
            HighPrecisionMoney.from_precise_amount(1, 21, EUR).get_or_raise()

    def test_non_integer_inputs_are_programming_errors(self):
        with pytest.raises(TypeError):
            HighPrecisionMoney.from_precise_amount("123456", 4, EUR)
        with pytest.raises(TypeError):
            HighPrecisionMoney.from_precise_amount(123456, 4.0, EUR)
