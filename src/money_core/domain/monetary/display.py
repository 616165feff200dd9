from __future__ import annotations

from decimal import Decimal
from typing import Protocol, runtime_checkable

from money_core.domain.monetary.currency import Currency


@runtime_checkable
class MoneyFormatter(Protocol):
    """Locale-aware number formatter bound to one currency.

    Implementations live outside the money engine (e.g. wrappers around a locale library).
    The engine only checks that the formatter's currency matches the formatted amount.
    """

    @property
    def currency(self) -> Currency:
        """Return the currency this formatter is configured for."""
        ...

    def format(self, amount: Decimal) -> str:
        """Format $amount as a localized number (grouping, decimal separator)."""
        ...

    def currency_symbol(self, currency: Currency) -> str:
        """Return the localized symbol of $currency (e.g. "€" or "US$")."""
        ...
