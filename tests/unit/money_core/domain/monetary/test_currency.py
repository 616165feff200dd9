import pytest

from money_core.domain.monetary.currency import Currency
from money_core.domain.monetary.currency_registry import BHD, CLF, EUR, JPY


class TestCurrency:
    def test_lookup_by_code_is_case_insensitive(self):
        assert Currency.from_str("eur") is EUR
        assert Currency.from_str(" JPY ") is JPY

    def test_lookup_by_numeric_code(self):
        assert Currency.from_numeric_code(978) is EUR
        assert Currency.from_numeric_code(48) is BHD

    def test_default_fraction_digits(self):
        assert JPY.default_fraction_digits == 0
        assert EUR.default_fraction_digits == 2
        assert BHD.default_fraction_digits == 3
        assert CLF.default_fraction_digits == 4

    def test_equality_and_hash_by_code(self):
        other_eur = Currency("eur", 2, "Euro")
        assert other_eur == EUR
        assert hash(other_eur) == hash(EUR)
        assert str(EUR) == "EUR"

    def test_unknown_codes_raise(self):
        with pytest.raises(ValueError):
            Currency.from_str("ABC")
        with pytest.raises(ValueError):
            Currency.from_numeric_code(1)

    def test_invalid_parameters_raise(self):
        with pytest.raises(ValueError):
            Currency("", 2, "Empty")
        with pytest.raises(ValueError):
            Currency("XTS", -1, "Negative digits")
        with pytest.raises(ValueError):
            Currency("XTS", 19, "Too many digits")

    def test_register_refuses_duplicates_and_taken_numeric_codes(self):
        with pytest.raises(ValueError):
            Currency.register(Currency("EUR", 2, "Euro", 978))
        with pytest.raises(ValueError):
            Currency.register(Currency("XXA", 2, "Clashing", 978))
        with pytest.raises(TypeError):
            Currency.register("EUR")

    def test_register_test_currency(self):
        xts = Currency("XTS", 2, "Testing code", 963)
        Currency.register(xts, overwrite=True)

        assert Currency.from_str("XTS") is xts
        assert Currency.from_numeric_code(963) is xts
