from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from money_core.config import get_settings
from money_core.domain.monetary.currency import Currency
from money_core.domain.monetary.display import MoneyFormatter
from money_core.domain.monetary.rounding import RoundingMode
from money_core.utils.decimal_tools import DecimalLike, is_decimal_like, to_plain_string

if TYPE_CHECKING:
    from money_core.domain.monetary.money import Money

# Field names shared with the serialization layer; the strings are part of the wire format
TYPE_FIELD = "type"
CURRENCY_CODE_FIELD = "currencyCode"
CENT_AMOUNT_FIELD = "centAmount"
PRECISE_AMOUNT_FIELD = "preciseAmount"
FRACTION_DIGITS_FIELD = "fractionDigits"

CENT_PRECISION_TYPE = "centPrecision"
HIGH_PRECISION_TYPE = "highPrecision"


def require_same_currency(m1: BaseMoney, m2: BaseMoney) -> None:
    """Fail fast if $m1 and $m2 are in different currencies.

    Raises:
        ValueError: If currencies don't match.
    """
    if m1.currency != m2.currency:
        raise ValueError(f"Cannot operate on different currencies: {m1.currency} and {m2.currency}")


class BaseMoney(ABC):
    """Common capability of cent-precision and high-precision money.

    Both representations are immutable. Binary operations take an explicit `RoundingMode`; the Python
    operators use `MoneySettings.default_rounding_mode` instead. Operands may be any `BaseMoney`
    (dispatched on its `type`) or a raw decimal, which is first converted to the receiver's currency and
    precision. Mixing cent and high precision always yields high precision.
    """

    __slots__ = ()

    TYPE_NAME: str = ""

    @property
    def type(self) -> str:
        """Type discriminant: "centPrecision" or "highPrecision"."""
        return self.TYPE_NAME

    @property
    @abstractmethod
    def currency(self) -> Currency: ...

    @property
    @abstractmethod
    def amount(self) -> Decimal:
        """Normalized decimal amount; its scale equals `fraction_digits`."""

    @property
    @abstractmethod
    def cent_amount(self) -> int:
        """Amount in minor units of the currency. Loses precision for high-precision values."""

    @property
    @abstractmethod
    def fraction_digits(self) -> int: ...

    @abstractmethod
    def to_money_with_precision_loss(self) -> Money: ...

    @abstractmethod
    def add(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> BaseMoney: ...

    @abstractmethod
    def subtract(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> BaseMoney: ...

    @abstractmethod
    def multiply(self, other: BaseMoney | DecimalLike, mode: RoundingMode) -> BaseMoney: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Return the logical fields consumed by serializers, keyed by their wire names."""

    def _check_same_currency(self, other: BaseMoney) -> None:
        require_same_currency(self, other)

    def _compare(self, other: BaseMoney) -> int:
        self._check_same_currency(other)
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    @staticmethod
    def _is_operand(other: object) -> bool:
        return isinstance(other, BaseMoney) or is_decimal_like(other)

    # Operators with the configured default rounding mode
    def __add__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.add(other, get_settings().default_rounding_mode)

    def __sub__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.subtract(other, get_settings().default_rounding_mode)

    def __mul__(self, other):
        if not self._is_operand(other):
            return NotImplemented
        return self.multiply(other, get_settings().default_rounding_mode)

    def __rmul__(self, other):
        """Right multiplication: number * Money."""
        if not is_decimal_like(other):
            return NotImplemented
        return self.multiply(other, get_settings().default_rounding_mode)

    # Ordering (same currency required)
    def __lt__(self, other) -> bool:
        if not isinstance(other, BaseMoney):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, BaseMoney):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, BaseMoney):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, BaseMoney):
            return NotImplemented
        return self._compare(other) >= 0

    # String representations
    def __str__(self) -> str:
        """Return string like '12.34 EUR'."""
        return f"{to_plain_string(self.amount)} {self.currency.code}"

    def to_display_str(self, formatter: MoneyFormatter) -> str:
        """Return the amount formatted by a locale-aware $formatter, followed by the localized currency symbol.

        Args:
            formatter: Formatter configured for the same currency as this value.

        Returns:
            str: Text like '1.234,56 €'.

        Raises:
            ValueError: If $formatter is configured for another currency.
        """
        # Raise: a formatter for another currency would print a misleading symbol and number of digits
        if formatter.currency != self.currency:
            raise ValueError(f"Cannot call `to_display_str` because formatter currency {formatter.currency} does not match {self.currency}")

        return f"{formatter.format(self.amount)} {formatter.currency_symbol(self.currency)}"
