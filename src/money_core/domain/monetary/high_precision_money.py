from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from functools import reduce
from typing import Any, Callable, Iterable

from money_core.config import get_settings
from money_core.domain.monetary.base_money import (
    CENT_AMOUNT_FIELD,
    CENT_PRECISION_TYPE,
    CURRENCY_CODE_FIELD,
    FRACTION_DIGITS_FIELD,
    HIGH_PRECISION_TYPE,
    PRECISE_AMOUNT_FIELD,
    TYPE_FIELD,
    BaseMoney,
    require_same_currency,
)
from money_core.domain.monetary.currency import Currency
from money_core.domain.monetary.currency_registry import EUR, GBP, JPY, USD
from money_core.domain.monetary.money import Money
from money_core.domain.monetary.partition import partition_units
from money_core.domain.monetary.rounding import RoundingMode, cent_factor, set_scale, to_units
from money_core.utils.decimal_tools import MONEY_CONTEXT, DecimalLike, as_decimal, scale_of, to_plain_string
from money_core.utils.validated import Invalid, Valid, Validated, combine

logger = logging.getLogger(__name__)

# Upper bound for fraction digits accepted from external data
MAX_FRACTION_DIGITS = 20

# Precise amounts from external data are signed 64-bit integers
MIN_PRECISE_AMOUNT = -(2**63)
MAX_PRECISE_AMOUNT = 2**63 - 1


class HighPrecisionMoney(BaseMoney):
    """Represents an amount of money with more fraction digits than the currency's minor unit.

    Besides the precise $amount, every instance stores a $cent_amount: the amount rounded to the currency's
    minor unit. It is computed once, with an explicit rounding mode, when the instance is created and never
    re-derived silently. Consumers that only understand cent precision read it directly.

    Attributes:
        amount (Decimal): Precise amount; its scale equals $fraction_digits (e.g. 12.3456).
        fraction_digits (int): Number of fraction digits, at least the currency's default.
        cent_amount (int): Amount rounded to minor units (e.g. 1235).
        currency (Currency): Currency of the amount.
    """

    __slots__ = ("_amount", "_fraction_digits", "_cent_amount", "_currency")

    TYPE_NAME = HIGH_PRECISION_TYPE

    def __init__(self, amount: Decimal, fraction_digits: int, cent_amount: int, currency: Currency):
        """Initialize HighPrecisionMoney from already consistent parts.

        Prefer the factories; this constructor only checks the scale invariants, not that
        $cent_amount is a rounding of $amount.

        Raises:
            TypeError: If an argument has the wrong type.
            ValueError: If the scale of $amount differs from $fraction_digits, or $fraction_digits is below the currency default.
        """
        # Raise: currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        # Raise: amount must be a finite Decimal (scale is undefined otherwise)
        if not isinstance(amount, Decimal) or not amount.is_finite():
            raise TypeError(f"$amount must be a finite Decimal, but provided value is: {amount!r}")

        # Raise: minor units are whole numbers
        if not isinstance(cent_amount, int) or isinstance(cent_amount, bool):
            raise TypeError(f"$cent_amount must be an int, but provided value is: {cent_amount!r}")

        # Raise: the scale of $amount must equal $fraction_digits
        if scale_of(amount) != fraction_digits:
            raise ValueError(f"The scale of the given amount does not match the scale of the provided currency - {scale_of(amount)} <-> {fraction_digits}")

        # Raise: high precision only ever adds fraction digits
        if fraction_digits < currency.default_fraction_digits:
            raise ValueError(f"$fraction_digits ({fraction_digits}) should be >= than the default fraction digits of the currency ({currency.default_fraction_digits})")

        self._amount = amount
        self._fraction_digits = fraction_digits
        self._cent_amount = cent_amount
        self._currency = currency

    # region Scale helpers

    @staticmethod
    def factor(fraction_digits: int) -> Decimal:
        return cent_factor(fraction_digits)

    @staticmethod
    def cent_factor(currency: Currency) -> Decimal:
        return cent_factor(currency.default_fraction_digits)

    @staticmethod
    def round_to_cents(amount: Decimal, currency: Currency, mode: RoundingMode) -> int:
        """Round $amount to the currency's minor unit under $mode and return it as a minor-unit count."""
        fraction_digits = currency.default_fraction_digits
        return to_units(set_scale(amount, fraction_digits, mode), fraction_digits)

    @staticmethod
    def same_scale(m1: HighPrecisionMoney, m2: HighPrecisionMoney) -> tuple[Decimal, Decimal, int]:
        """Align both amounts to the larger of the two fraction-digit counts.

        Amounts are only ever padded with zeros, never rounded.

        Returns:
            tuple: ($m1 amount, $m2 amount, shared fraction digits).

        Raises:
            RuntimeError: If an amount would have to be narrowed.
        """
        fraction_digits = max(m1.fraction_digits, m2.fraction_digits)

        def widen(money: HighPrecisionMoney) -> Decimal:
            if money.fraction_digits < fraction_digits:
                return set_scale(money.amount, fraction_digits, RoundingMode.UNNECESSARY)
            if money.fraction_digits == fraction_digits:
                return money.amount
            raise RuntimeError("Downscale is not allowed/expected at this point!")

        return widen(m1), widen(m2), fraction_digits

    @classmethod
    def calc(cls, m1: HighPrecisionMoney, m2: HighPrecisionMoney, fn: Callable[[Decimal, Decimal], Decimal], mode: RoundingMode) -> HighPrecisionMoney:
        """Apply $fn to the scale-aligned amounts of $m1 and $m2 and wrap the result at the aligned precision."""
        require_same_currency(m1, m2)

        a1, a2, fraction_digits = cls.same_scale(m1, m2)
        return cls.from_decimal_amount(fn(a1, a2), fraction_digits, m1.currency, mode)

    # endregion

    # region Factories

    @classmethod
    def from_decimal_amount(cls, amount: DecimalLike, fraction_digits: int, currency: Currency, mode: RoundingMode) -> HighPrecisionMoney:
        """Round $amount to $fraction_digits under $mode; the cent amount is rounded with the same $mode."""
        try:
            decimal_amount = as_decimal(amount)
        except InvalidOperation as e:
            raise ValueError(f"Cannot call `HighPrecisionMoney.from_decimal_amount` because $amount ({amount}) cannot be converted to Decimal") from e

        scaled_amount = set_scale(decimal_amount, fraction_digits, mode)
        return cls(scaled_amount, fraction_digits, cls.round_to_cents(scaled_amount, currency, mode), currency)

    @classmethod
    def from_cent_amount(cls, cent_amount: int, fraction_digits: int, currency: Currency) -> HighPrecisionMoney:
        """Create a value from a minor-unit count, padded to $fraction_digits."""
        # Raise: minor units are whole numbers
        if not isinstance(cent_amount, int) or isinstance(cent_amount, bool):
            raise TypeError(f"$cent_amount must be an int, but provided value is: {cent_amount!r}")

        amount = MONEY_CONTEXT.multiply(Decimal(cent_amount), cls.cent_factor(currency))
        return cls(set_scale(amount, fraction_digits, RoundingMode.UNNECESSARY), fraction_digits, cent_amount, currency)

    @classmethod
    def from_money(cls, money: Money, fraction_digits: int) -> HighPrecisionMoney:
        """Widen a cent-precision value to $fraction_digits; the cent amount is copied unchanged."""
        return cls(set_scale(money.amount, fraction_digits, RoundingMode.UNNECESSARY), fraction_digits, money.cent_amount, money.currency)

    @classmethod
    def zero(cls, fraction_digits: int, currency: Currency) -> HighPrecisionMoney:
        return cls.from_cent_amount(0, fraction_digits, currency)

    @classmethod
    def from_precise_amount(cls, precise_amount: int, fraction_digits: int, currency: Currency, cent_amount: int | None = None) -> Validated[HighPrecisionMoney]:
        """Build a value from untrusted external parts, collecting every validation error.

        Checks run independently: $fraction_digits must be above the currency default and at most
        `MAX_FRACTION_DIGITS`; $precise_amount must fit a signed 64-bit integer; an explicit
        $cent_amount must lie between the precise amount rounded down and rounded up to minor units.
        The cent amount check is skipped for a precise amount out of range, whose scaled value is not exact.
        Without $cent_amount, it is derived with `MoneySettings.precise_cent_rounding_mode`. $cent_amount
        is the escape hatch for data rounded with another mode elsewhere.

        Args:
            precise_amount: Amount as an integer count of 10^-$fraction_digits units (e.g. 123456).
            fraction_digits: Number of fraction digits of $precise_amount (e.g. 4 for 12.3456).
            currency: Currency of the amount.
            cent_amount: Optional externally computed minor-unit amount.

        Returns:
            Validated[HighPrecisionMoney]: `Valid` with the value, or `Invalid` with all error messages.
        """
        # Raise: integer inputs are a programming contract, not external data to validate
        if not isinstance(precise_amount, int) or isinstance(precise_amount, bool):
            raise TypeError(f"$precise_amount must be an int, but provided value is: {precise_amount!r}")
        if not isinstance(fraction_digits, int) or isinstance(fraction_digits, bool):
            raise TypeError(f"$fraction_digits must be an int, but provided value is: {fraction_digits!r}")

        amount = Decimal(precise_amount).scaleb(-fraction_digits, context=MONEY_CONTEXT)
        precise_amount_result = _validate_precise_amount(precise_amount)
        result = combine(
            _validate_fraction_digits(fraction_digits, currency),
            precise_amount_result,
            _validate_cent_amount(amount, cent_amount, currency) if precise_amount_result.is_valid else Valid(None),
        )

        if isinstance(result, Invalid):
            logger.debug(f"Rejected high precision amount {precise_amount} with {fraction_digits} fraction digit(s) in {currency}: {list(result.errors)}")
            return result

        actual_cent_amount = cent_amount if cent_amount is not None else cls.round_to_cents(amount, currency, get_settings().precise_cent_rounding_mode)
        return Valid(cls(amount, fraction_digits, actual_cent_amount, currency))

    @classmethod
    def _of(cls, amount: DecimalLike, currency: Currency, fraction_digits: int | None) -> HighPrecisionMoney:
        resolved = currency.default_fraction_digits if fraction_digits is None else fraction_digits
        return cls.from_decimal_amount(amount, resolved, currency, RoundingMode.HALF_EVEN)

    @classmethod
    def eur(cls, amount: DecimalLike, fraction_digits: int | None = None) -> HighPrecisionMoney:
        return cls._of(amount, EUR, fraction_digits)

    @classmethod
    def usd(cls, amount: DecimalLike, fraction_digits: int | None = None) -> HighPrecisionMoney:
        return cls._of(amount, USD, fraction_digits)

    @classmethod
    def gbp(cls, amount: DecimalLike, fraction_digits: int | None = None) -> HighPrecisionMoney:
        return cls._of(amount, GBP, fraction_digits)

    @classmethod
    def jpy(cls, amount: DecimalLike, fraction_digits: int | None = None) -> HighPrecisionMoney:
        return cls._of(amount, JPY, fraction_digits)

    # endregion

    # region Properties

    @property
    def amount(self) -> Decimal:
        """Get the precise decimal amount (e.g. 12.3456)."""
        return self._amount

    @property
    def currency(self) -> Currency:
        """Get the currency."""
        return self._currency

    @property
    def cent_amount(self) -> int:
        """Get the stored minor-unit amount (use with caution: it is rounded)."""
        return self._cent_amount

    @property
    def fraction_digits(self) -> int:
        return self._fraction_digits

    @property
    def precise_amount(self) -> int:
        """Get the amount as an exact count of 10^-fraction_digits units (e.g. 123456 for 12.3456)."""
        return to_units(self._amount, self._fraction_digits)

    # endregion

    # region Conversions

    def with_fraction_digits(self, fraction_digits: int, mode: RoundingMode) -> HighPrecisionMoney:
        """Rescale to $fraction_digits under $mode (rounds when narrowing) and recompute the cent amount."""
        new_amount = set_scale(self._amount, fraction_digits, mode)
        return HighPrecisionMoney(new_amount, fraction_digits, self.round_to_cents(new_amount, self._currency, mode), self._currency)

    def update_cent_amount_with_rounding_mode(self, mode: RoundingMode) -> HighPrecisionMoney:
        """Re-derive only the cent amount from the unchanged precise amount, under $mode."""
        return HighPrecisionMoney(self._amount, self._fraction_digits, self.round_to_cents(self._amount, self._currency, mode), self._currency)

    def to_money_with_precision_loss(self) -> Money:
        return Money.from_cent_amount(self._cent_amount, self._currency)

    def to_dict(self) -> dict[str, Any]:
        return {
            TYPE_FIELD: self.type,
            CURRENCY_CODE_FIELD: self._currency.code,
            CENT_AMOUNT_FIELD: self._cent_amount,
            PRECISE_AMOUNT_FIELD: self.precise_amount,
            FRACTION_DIGITS_FIELD: self._fraction_digits,
        }

    # endregion

    # region Arithmetic

    def _coerce(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> HighPrecisionMoney:
        """Bring $other to high precision: money at this value's fraction digits, raw decimals in this currency too."""
        if isinstance(other, BaseMoney):
            self._check_same_currency(other)
            if other.type == CENT_PRECISION_TYPE:
                return HighPrecisionMoney.from_money(other, self._fraction_digits)
            return other
        return HighPrecisionMoney.from_decimal_amount(other, self._fraction_digits, self._currency, mode)

    def add(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> HighPrecisionMoney:
        return self.calc(self, self._coerce(other, mode), MONEY_CONTEXT.add, mode)

    def subtract(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> HighPrecisionMoney:
        return self.calc(self, self._coerce(other, mode), MONEY_CONTEXT.subtract, mode)

    def multiply(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> HighPrecisionMoney:
        """Multiply at the aligned precision; the product is rounded back to it under $mode."""
        return self.calc(self, self._coerce(other, mode), MONEY_CONTEXT.multiply, mode)

    def divmod(self, divisor: DecimalLike, mode: RoundingMode) -> tuple[HighPrecisionMoney, HighPrecisionMoney]:
        """Divide to an integral quotient and a remainder, both at this value's fraction digits.

        Raises:
            ZeroDivisionError: If $divisor is zero.
        """
        decimal_divisor = as_decimal(divisor)
        if decimal_divisor == 0:
            raise ZeroDivisionError("Cannot divide HighPrecisionMoney by zero")

        quotient, remainder = MONEY_CONTEXT.divmod(self._amount, decimal_divisor)
        return (
            HighPrecisionMoney.from_decimal_amount(quotient, self._fraction_digits, self._currency, mode),
            HighPrecisionMoney.from_decimal_amount(remainder, self._fraction_digits, self._currency, mode),
        )

    def remainder(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> HighPrecisionMoney:
        """Remainder of truncated division by $other (sign follows this amount).

        Raises:
            ZeroDivisionError: If $other is zero.
        """
        divisor = self._coerce(other, mode)
        if divisor.amount == 0:
            raise ZeroDivisionError("Cannot divide HighPrecisionMoney by zero")
        return self.calc(self, divisor, MONEY_CONTEXT.remainder, mode)

    def negate(self) -> HighPrecisionMoney:
        """Negate exactly; the stored cent amount is mirrored rather than re-rounded."""
        negated = set_scale(MONEY_CONTEXT.minus(self._amount), self._fraction_digits, RoundingMode.UNNECESSARY)
        return HighPrecisionMoney(negated, self._fraction_digits, -self._cent_amount, self._currency)

    def partition(self, *ratios: int, mode: RoundingMode = RoundingMode.HALF_EVEN) -> list[HighPrecisionMoney]:
        """Split into parts proportional to $ratios without losing or gaining any 10^-fraction_digits unit.

        Units left over after the proportional split go to the first parts, one each. Each part's cent
        amount is rounded under $mode.
        """
        factor = self.factor(self._fraction_digits)
        return [
            HighPrecisionMoney.from_decimal_amount(MONEY_CONTEXT.multiply(Decimal(units), factor), self._fraction_digits, self._currency, mode)
            for units in partition_units(self.precise_amount, ratios)
        ]

    def __neg__(self) -> HighPrecisionMoney:
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
        if not isinstance(other, HighPrecisionMoney):
            return False
        return (
            self._currency == other.currency
            and self._amount == other.amount
            and self._fraction_digits == other.fraction_digits
            and self._cent_amount == other.cent_amount
        )

    def __hash__(self) -> int:
        return hash((self._amount, self._fraction_digits, self._cent_amount, self._currency.code))

    def __repr__(self) -> str:
        """Return string like 'HighPrecisionMoney(12.3456, 4, 1235, EUR)'."""
        return f"{self.__class__.__name__}({to_plain_string(self._amount)}, {self._fraction_digits}, {self._cent_amount}, {self._currency.code})"


def _validate_fraction_digits(fraction_digits: int, currency: Currency) -> Validated[int]:
    if fraction_digits <= currency.default_fraction_digits:
        return Invalid((f"fractionDigits must be > {currency.default_fraction_digits} (default fraction digits defined by currency {currency.code}).",))
    if fraction_digits > MAX_FRACTION_DIGITS:
        return Invalid((f"fractionDigits must be <= {MAX_FRACTION_DIGITS}.",))
    return Valid(fraction_digits)


def _validate_precise_amount(precise_amount: int) -> Validated[int]:
    if not MIN_PRECISE_AMOUNT <= precise_amount <= MAX_PRECISE_AMOUNT:
        return Invalid((f"preciseAmount must be between {MIN_PRECISE_AMOUNT} and {MAX_PRECISE_AMOUNT}.",))
    return Valid(precise_amount)


def _validate_cent_amount(amount: Decimal, cent_amount: int | None, currency: Currency) -> Validated[int | None]:
    if cent_amount is None:
        return Valid(None)

    lowest = HighPrecisionMoney.round_to_cents(amount, currency, RoundingMode.FLOOR)
    highest = HighPrecisionMoney.round_to_cents(amount, currency, RoundingMode.CEILING)
    if not lowest <= cent_amount <= highest:
        return Invalid((f"centAmount must be correctly rounded preciseAmount (a number between {lowest} and {highest}).",))
    return Valid(cent_amount)


def sum_high_precision(values: Iterable[BaseMoney], fraction_digits: int, currency: Currency, mode: RoundingMode) -> HighPrecisionMoney:
    """Add up $values starting from zero at $fraction_digits in $currency."""
    return reduce(lambda total, value: total.add(value, mode), values, HighPrecisionMoney.zero(fraction_digits, currency))
