from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation
from functools import reduce
from typing import TYPE_CHECKING, Any, Iterable

from money_core.config import get_settings
from money_core.domain.monetary.base_money import (
    CENT_AMOUNT_FIELD,
    CENT_PRECISION_TYPE,
    CURRENCY_CODE_FIELD,
    FRACTION_DIGITS_FIELD,
    HIGH_PRECISION_TYPE,
    TYPE_FIELD,
    BaseMoney,
)
from money_core.domain.monetary.currency import Currency
from money_core.domain.monetary.currency_registry import EUR, GBP, JPY, USD
from money_core.domain.monetary.partition import partition_units
from money_core.domain.monetary.rounding import RoundingMode, cent_factor, set_scale, to_units
from money_core.utils.decimal_tools import MONEY_CONTEXT, DecimalLike, as_decimal, scale_of, to_plain_string

if TYPE_CHECKING:
    from money_core.domain.monetary.high_precision_money import HighPrecisionMoney


class Money(BaseMoney):
    """Represents an amount of money at the precision of its currency's minor unit (cent precision).

    Fractional minor units (e.g. a tenth of a cent) are not supported: the scale of $amount always
    equals `currency.default_fraction_digits`. Use the `from_decimal_amount` factory to round arbitrary
    amounts into this shape; the constructor only accepts amounts that already have it.

    Example:
        >>> Money.from_cent_amount(1234, EUR)
        Money(12.34, EUR)
    """

    __slots__ = ("_amount", "_currency")

    TYPE_NAME = CENT_PRECISION_TYPE

    def __init__(self, amount: Decimal, currency: Currency):
        """Initialize Money with an amount already at cent precision.

        Args:
            amount (Decimal): Amount whose scale equals the currency's default fraction digits.
            currency (Currency): Currency object.

        Raises:
            TypeError: If $amount is not Decimal or $currency is not Currency.
            ValueError: If the scale of $amount does not match the currency.
        """
        # Raise: currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        # Raise: amount must be a finite Decimal (scale is undefined otherwise)
        if not isinstance(amount, Decimal) or not amount.is_finite():
            raise TypeError(f"$amount must be a finite Decimal, but provided value is: {amount!r}")

        # Raise: the scale of $amount must equal the currency's fraction digits
        if scale_of(amount) != currency.default_fraction_digits:
            raise ValueError(f"The scale of the given amount does not match the scale of the provided currency - {scale_of(amount)} <-> {currency.default_fraction_digits}")

        self._amount = amount
        self._currency = currency

    # region Factories

    @classmethod
    def from_decimal_amount(cls, amount: DecimalLike, currency: Currency, mode: RoundingMode) -> Money:
        """Round $amount to the currency's fraction digits under $mode.

        Raises:
            ValueError: If $amount cannot be converted to Decimal, or $mode is UNNECESSARY and rounding is needed.
        """
        try:
            decimal_amount = as_decimal(amount)
        except InvalidOperation as e:
            raise ValueError(f"Cannot call `Money.from_decimal_amount` because $amount ({amount}) cannot be converted to Decimal") from e

        return cls(set_scale(decimal_amount, currency.default_fraction_digits, mode), currency)

    @classmethod
    def from_cent_amount(cls, cent_amount: int, currency: Currency) -> Money:
        """Create Money from an integer count of minor units (e.g. 1234 -> 12.34 EUR)."""
        # Raise: minor units are whole numbers
        if not isinstance(cent_amount, int) or isinstance(cent_amount, bool):
            raise TypeError(f"$cent_amount must be an int, but provided value is: {cent_amount!r}")

        amount = MONEY_CONTEXT.multiply(Decimal(cent_amount), cent_factor(currency.default_fraction_digits))
        return cls.from_decimal_amount(amount, currency, RoundingMode.UNNECESSARY)

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        """Return zero in $currency; instances for the most used currencies are shared."""
        cached = _CACHED_ZEROS.get(currency.code)
        if cached is not None and cached.currency is currency:
            return cached
        return cls.from_cent_amount(0, currency)

    @classmethod
    def eur(cls, amount: DecimalLike) -> Money:
        return cls.from_decimal_amount(amount, EUR, RoundingMode.HALF_EVEN)

    @classmethod
    def usd(cls, amount: DecimalLike) -> Money:
        return cls.from_decimal_amount(amount, USD, RoundingMode.HALF_EVEN)

    @classmethod
    def gbp(cls, amount: DecimalLike) -> Money:
        return cls.from_decimal_amount(amount, GBP, RoundingMode.HALF_EVEN)

    @classmethod
    def jpy(cls, amount: DecimalLike) -> Money:
        return cls.from_decimal_amount(amount, JPY, RoundingMode.HALF_EVEN)

    @classmethod
    def from_str(cls, value_str: str) -> Money:
        """Parse Money from string like '1000.50 USD'.

        The amount is rounded to the currency's fraction digits with `MoneySettings.default_rounding_mode`.

        Args:
            value_str (str): String representation.

        Returns:
            Money: Money object.

        Raises:
            ValueError: If string format is invalid.
        """
        value_str = value_str.strip()
        if not value_str:
            raise ValueError("Value string with $value_str = '' cannot be empty")

        # Split by whitespace
        parts = value_str.split()
        if len(parts) != 2:
            raise ValueError(f"Value string with $value_str = '{value_str}' must be in format 'value currency_code'")

        value_part, currency_part = parts

        try:
            value = Decimal(value_part)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise ValueError(f"Invalid value part '{value_part}' in string '{value_str}'") from e

        try:
            currency = Currency.from_str(currency_part)
        except ValueError as e:
            raise ValueError(f"Invalid currency part '{currency_part}' in string '{value_str}'") from e

        return cls.from_decimal_amount(value, currency, get_settings().default_rounding_mode)

    # endregion

    # region Properties

    @property
    def amount(self) -> Decimal:
        """Get the decimal amount (e.g. 12.34)."""
        return self._amount

    @property
    def currency(self) -> Currency:
        """Get the currency."""
        return self._currency

    @property
    def cent_amount(self) -> int:
        """Get the amount in minor units (e.g. 1234 for 12.34 EUR)."""
        return to_units(self._amount, self.fraction_digits)

    @property
    def fraction_digits(self) -> int:
        return self._currency.default_fraction_digits

    # endregion

    # region Conversions

    def with_cent_amount(self, cent_amount: int) -> Money:
        """Return Money in the same currency with the given minor-unit count."""
        return Money.from_cent_amount(cent_amount, self._currency)

    def to_high_precision_money(self, fraction_digits: int) -> HighPrecisionMoney:
        """Widen this value to $fraction_digits without rounding, keeping its cent amount."""
        from money_core.domain.monetary.high_precision_money import HighPrecisionMoney

        return HighPrecisionMoney.from_money(self, fraction_digits)

    def with_context(self, context: Context) -> Money:
        """Round the amount to the significant digits and rounding of $context, then back to cent precision.

        Example: 1234.56 EUR with `Context(prec=3)` becomes 1230.00 EUR.
        """
        return Money.from_decimal_amount(context.plus(self._amount), self._currency, RoundingMode.HALF_EVEN)

    def to_money_with_precision_loss(self) -> Money:
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            TYPE_FIELD: self.type,
            CURRENCY_CODE_FIELD: self._currency.code,
            CENT_AMOUNT_FIELD: self.cent_amount,
            FRACTION_DIGITS_FIELD: self.fraction_digits,
        }

    # endregion

    # region Arithmetic

    def _coerce(self, value: DecimalLike, mode: RoundingMode) -> Money:
        return Money.from_decimal_amount(value, self._currency, mode)

    def add(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> BaseMoney:
        """Add $other; returns HighPrecisionMoney if $other is high precision, Money otherwise.

        Two cent-precision values are added with `MoneySettings.addition_rounding_mode`, regardless of $mode.
        $mode still applies to converting a raw decimal operand and to promoted high-precision results.
        """
        if not isinstance(other, BaseMoney):
            return self.add(self._coerce(other, mode), mode)

        self._check_same_currency(other)
        if other.type == HIGH_PRECISION_TYPE:
            return self.to_high_precision_money(other.fraction_digits).add(other, mode)

        return Money.from_decimal_amount(MONEY_CONTEXT.add(self._amount, other.amount), self._currency, get_settings().addition_rounding_mode)

    def subtract(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> BaseMoney:
        if not isinstance(other, BaseMoney):
            return self.subtract(self._coerce(other, mode), mode)

        self._check_same_currency(other)
        if other.type == HIGH_PRECISION_TYPE:
            return self.to_high_precision_money(other.fraction_digits).subtract(other, mode)

        return Money.from_decimal_amount(MONEY_CONTEXT.subtract(self._amount, other.amount), self._currency, mode)

    def multiply(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> BaseMoney:
        """Multiply by a factor or by the amount of another money value.

        The product is rounded back to this value's scale under $mode.
        """
        if isinstance(other, BaseMoney):
            self._check_same_currency(other)
            if other.type == HIGH_PRECISION_TYPE:
                return self.to_high_precision_money(other.fraction_digits).multiply(other, mode)

            return self.multiply(other.amount, mode)

        try:
            factor = as_decimal(other)
        except InvalidOperation as e:
            raise ValueError(f"Cannot call `Money.multiply` because $other ({other}) cannot be converted to Decimal") from e

        product = MONEY_CONTEXT.multiply(self._amount, factor)
        return Money.from_decimal_amount(set_scale(product, scale_of(self._amount), mode), self._currency, mode)

    def divmod(self, divisor: DecimalLike, mode: RoundingMode) -> tuple[Money, Money]:
        """Divide to an integral quotient and a remainder.

        The quotient is truncated toward zero and the remainder takes the sign of this amount,
        so `quotient * divisor + remainder` equals the original amount.

        Raises:
            ZeroDivisionError: If $divisor is zero.
        """
        decimal_divisor = as_decimal(divisor)
        if decimal_divisor == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")

        quotient, remainder = MONEY_CONTEXT.divmod(self._amount, decimal_divisor)
        return Money.from_decimal_amount(quotient, self._currency, mode), Money.from_decimal_amount(remainder, self._currency, mode)

    def remainder(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> BaseMoney:
        """Remainder of truncated division by $other (sign follows this amount).

        Raises:
            ZeroDivisionError: If $other is zero.
        """
        if not isinstance(other, BaseMoney):
            return self.remainder(self._coerce(other, mode), mode)

        self._check_same_currency(other)
        if other.type == HIGH_PRECISION_TYPE:
            return self.to_high_precision_money(other.fraction_digits).remainder(other, mode)

        if other.amount == 0:
            raise ZeroDivisionError("Cannot divide Money by zero Money")
        return Money.from_decimal_amount(MONEY_CONTEXT.remainder(self._amount, other.amount), self._currency, mode)

    def negate(self) -> Money:
        return Money.from_decimal_amount(MONEY_CONTEXT.minus(self._amount), self._currency, RoundingMode.UNNECESSARY)

    def partition(self, *ratios: int) -> list[Money]:
        """Split into parts proportional to $ratios without losing or gaining any cent.

        Cents left over after the proportional split go to the first parts, one each.

        Example:
            >>> Money.eur("0.05").partition(3, 7)
            [Money(0.02, EUR), Money(0.03, EUR)]
        """
        return [Money.from_cent_amount(units, self._currency) for units in partition_units(self.cent_amount, ratios)]

    def __neg__(self) -> Money:
        return self.negate()

    def __mod__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.remainder(other, get_settings().default_rounding_mode)

    def __divmod__(self, other):
        if isinstance(other, BaseMoney) or not self._is_operand(other):
            return NotImplemented
        return self.divmod(other, get_settings().default_rounding_mode)

    # endregion

    def __eq__(self, other) -> bool:
        """Check equality with another Money object."""
        if not isinstance(other, Money):
            return False
        return self._currency == other.currency and self._amount == other.amount

    def __hash__(self) -> int:
        """Hash based on amount and currency code."""
        return hash((self._amount, self._currency.code))

    def __repr__(self) -> str:
        """Return string like 'Money(1000.50, USD)'."""
        return f"{self.__class__.__name__}({to_plain_string(self._amount)}, {self._currency.code})"


def sum_money(values: Iterable[BaseMoney], currency: Currency, mode: RoundingMode) -> BaseMoney:
    """Add up $values starting from zero in $currency.

    Returns Money(0) for an empty iterable; the result becomes high precision as soon as one value is.
    """
    return reduce(lambda total, value: total.add(value, mode), values, Money.zero(currency))


# Shared zero values, built once at import
_CACHED_ZEROS: dict[str, Money] = {currency.code: Money.from_cent_amount(0, currency) for currency in (EUR, USD, GBP, JPY)}
