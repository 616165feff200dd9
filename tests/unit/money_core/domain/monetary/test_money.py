from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from decimal import Context, Decimal as D, ROUND_UP

import pytest

from money_core.domain.monetary.currency_registry import CHF, EUR, JPY, USD
from money_core.domain.monetary.money import Money, sum_money
from money_core.domain.monetary.rounding import RoundingMode
from tests.helpers.helper_money import CommaFormatter, create_eur


class TestMoneyConstruction:
    def test_from_cent_amount(self):
        money = Money.from_cent_amount(1234, EUR)

        assert str(money.amount) == "12.34"
        assert money.cent_amount == 1234
        assert money.fraction_digits == 2
        assert money.type == "centPrecision"

    def test_from_decimal_amount_rounds_under_given_mode(self):
        assert Money.from_decimal_amount(D("12.345"), EUR, RoundingMode.HALF_EVEN).amount == D("12.34")
        assert Money.from_decimal_amount(D("12.345"), EUR, RoundingMode.HALF_UP).amount == D("12.35")
        assert Money.from_decimal_amount("12.341", EUR, RoundingMode.CEILING).amount == D("12.35")

    def test_from_decimal_amount_pads_to_currency_scale(self):
        assert str(Money.from_decimal_amount(12, EUR, RoundingMode.UNNECESSARY).amount) == "12.00"
        assert str(Money.from_decimal_amount(D("1E+3"), EUR, RoundingMode.UNNECESSARY).amount) == "1000.00"

    def test_from_decimal_amount_unnecessary_rejects_rounding(self):
        with pytest.raises(ValueError):
            Money.from_decimal_amount(D("12.345"), EUR, RoundingMode.UNNECESSARY)

    def test_amount_beyond_context_precision_is_value_error(self):
        with pytest.raises(ValueError, match="significant digits"):
            Money.eur(D("1" + "0" * 40))

    def test_constructor_enforces_scale(self):
        assert Money(D("12.30"), EUR).amount == D("12.3")

        with pytest.raises(ValueError):
            Money(D("12.3"), EUR)
        with pytest.raises(ValueError):
            Money(D("12.300"), EUR)
        with pytest.raises(TypeError):
            Money(D("NaN"), EUR)
        with pytest.raises(TypeError):
            Money(D("12.30"), "EUR")

    def test_currency_constructors(self):
        assert Money.eur("12.345") == Money(D("12.34"), EUR)
        assert Money.usd(1.5) == Money(D("1.50"), USD)
        assert Money.jpy("1234.5") == Money(D("1234"), JPY)
        assert Money.jpy("1234.5").cent_amount == 1234

    def test_from_str(self):
        assert Money.from_str("1000.50 USD") == Money.usd("1000.50")
        assert Money.from_str(" 7 jpy ") == Money.jpy(7)

        with pytest.raises(ValueError):
            Money.from_str("")
        with pytest.raises(ValueError):
            Money.from_str("1000.50")
        with pytest.raises(ValueError):
            Money.from_str("abc EUR")
        with pytest.raises(ValueError):
            Money.from_str("1.00 ABC")

    def test_zero_is_cached_for_common_currencies(self):
        assert Money.zero(EUR) is Money.zero(EUR)
        assert str(Money.zero(EUR).amount) == "0.00"
        assert Money.zero(JPY).amount == D("0")
        assert Money.zero(CHF) == Money.from_cent_amount(0, CHF)

    def test_zero_is_shared_across_threads(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            zeros = list(pool.map(lambda _: Money.zero(USD), range(32)))

        assert all(zero is zeros[0] for zero in zeros)

    def test_with_cent_amount(self):
        assert create_eur("12.34").with_cent_amount(500) == create_eur("5.00")

    def test_with_context_rounds_significant_digits(self):
        assert create_eur("1234.56").with_context(Context(prec=3)) == create_eur("1230.00")
        assert create_eur("1234.56").with_context(Context(prec=3, rounding=ROUND_UP)) == create_eur("1240.00")


class TestMoneyArithmetic:
    def test_add_and_subtract(self):
        assert create_eur("1.10") + create_eur("2.25") == create_eur("3.35")
        assert create_eur("5.00") - create_eur("1.25") == create_eur("3.75")
        assert create_eur("1.10").add(create_eur("2.25"), RoundingMode.FLOOR) == create_eur("3.35")

    def test_add_then_subtract_is_exact(self):
        a = create_eur("10.01")
        b = create_eur("0.99")
        assert (a + b) - b == a

    def test_add_raw_decimal_uses_callers_mode(self):
        assert create_eur("1.00").add(D("0.005"), RoundingMode.HALF_UP) == create_eur("1.01")
        assert create_eur("1.00").add(D("0.005"), RoundingMode.HALF_EVEN) == create_eur("1.00")
        assert create_eur("1.00") + 2 == create_eur("3.00")

    def test_subtract_raw_decimal(self):
        assert create_eur("1.00").subtract("0.255", RoundingMode.DOWN) == create_eur("0.75")

    def test_multiply_by_decimal_rounds_to_original_scale(self):
        assert create_eur("10.00").multiply(D("0.333"), RoundingMode.HALF_UP) == create_eur("3.33")
        assert create_eur("1.00").multiply("0.125", RoundingMode.HALF_EVEN) == create_eur("0.12")
        assert create_eur("1.00").multiply("0.125", RoundingMode.HALF_UP) == create_eur("0.13")
        assert create_eur("1.00") * D("0.125") == create_eur("0.12")
        assert D("3") * create_eur("1.50") == create_eur("4.50")

    def test_multiply_by_money(self):
        assert create_eur("2.00").multiply(create_eur("1.50"), RoundingMode.HALF_EVEN) == create_eur("3.00")

    def test_divmod(self):
        quotient, remainder = create_eur("10.00").divmod(3, RoundingMode.HALF_EVEN)
        assert quotient == create_eur("3.00")
        assert remainder == create_eur("1.00")
        assert str(quotient.amount) == "3.00"

        assert divmod(create_eur("-10.00"), 3) == (create_eur("-3.00"), create_eur("-1.00"))

        with pytest.raises(ZeroDivisionError):
            create_eur("10.00").divmod(0, RoundingMode.HALF_EVEN)

    def test_remainder(self):
        assert create_eur("10.00") % create_eur("3.00") == create_eur("1.00")
        assert create_eur("10.00") % D("4") == create_eur("2.00")
        assert create_eur("-10.00").remainder(create_eur("3.00"), RoundingMode.HALF_EVEN) == create_eur("-1.00")

        with pytest.raises(ZeroDivisionError):
            create_eur("10.00") % create_eur("0.00")

    def test_negate(self):
        assert -create_eur("1.23") == create_eur("-1.23")
        assert -(-create_eur("1.23")) == create_eur("1.23")

    def test_unsupported_operand_types(self):
        with pytest.raises(TypeError):
            create_eur("1.00") + [1]
        with pytest.raises(TypeError):
            create_eur("1.00").add(object(), RoundingMode.HALF_EVEN)

    def test_sum_money(self):
        assert sum_money([create_eur("1.00"), create_eur("2.50")], EUR, RoundingMode.HALF_EVEN) == create_eur("3.50")
        assert sum_money([], EUR, RoundingMode.HALF_EVEN) is Money.zero(EUR)


class TestMoneyPartition:
    def test_partition_spreads_leftover_cents(self):
        assert create_eur("0.05").partition(3, 7) == [create_eur("0.02"), create_eur("0.03")]
        assert create_eur("100.00").partition(1, 1, 1) == [create_eur("33.34"), create_eur("33.33"), create_eur("33.33")]

    def test_partition_single_ratio(self):
        assert create_eur("12.34").partition(1) == [create_eur("12.34")]

    @pytest.mark.parametrize("amount", ["0.00", "0.01", "0.99", "100.00", "-12.35", "123456.78"])
    @pytest.mark.parametrize("ratios", [(1,), (1, 1), (3, 7), (1, 2, 3), (2, 2, 2, 2, 2, 2)])
    def test_partition_conserves_total(self, amount, ratios):
        money = create_eur(amount)
        parts = money.partition(*ratios)

        assert sum_money(parts, EUR, RoundingMode.UNNECESSARY) == money

    def test_partition_yen(self):
        assert Money.jpy(100).partition(1, 2) == [Money.jpy(34), Money.jpy(66)]


class TestMoneyComparison:
    def test_ordering(self):
        assert create_eur("1.00") < create_eur("2.00")
        assert create_eur("2.00") >= create_eur("2.00")
        assert sorted([create_eur("3.00"), create_eur("-1.00"), create_eur("2.00")]) == [create_eur("-1.00"), create_eur("2.00"), create_eur("3.00")]

    def test_cross_currency_ordering_raises(self):
        with pytest.raises(ValueError):
            _ = create_eur("1.00") < Money.usd("2.00")

    def test_equality_and_hash(self):
        assert create_eur("1.00") != Money.usd("1.00")
        assert create_eur("1.00") != D("1.00")
        assert hash(Money.eur("1")) == hash(Money(D("1.00"), EUR))
        assert len({create_eur("1.00"), Money.eur(1), create_eur("2.00")}) == 2


class TestMoneyRepresentation:
    def test_str_and_repr(self):
        assert str(create_eur("12.34")) == "12.34 EUR"
        assert str(Money.jpy(1000)) == "1000 JPY"
        assert str(Money.from_decimal_amount(D("1E+3"), EUR, RoundingMode.UNNECESSARY)) == "1000.00 EUR"
        assert repr(create_eur("12.34")) == "Money(12.34, EUR)"

    def test_to_dict_uses_wire_field_names(self):
        assert create_eur("12.34").to_dict() == {
            "type": "centPrecision",
            "currencyCode": "EUR",
            "centAmount": 1234,
            "fractionDigits": 2,
        }

    def test_to_display_str(self):
        assert create_eur("12.34").to_display_str(CommaFormatter(EUR)) == "12,34 €"

        with pytest.raises(ValueError):
            create_eur("12.34").to_display_str(CommaFormatter(USD))

    def test_to_money_with_precision_loss_is_identity(self):
        money = create_eur("12.34")
        assert money.to_money_with_precision_loss() is money
