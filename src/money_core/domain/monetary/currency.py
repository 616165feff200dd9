from __future__ import annotations

import logging
from typing import Dict

from bidict import bidict

logger = logging.getLogger(__name__)


class Currency:
    """Represents a currency by its code and standard number of fraction digits.

    Attributes:
        code (str): Alphabetic currency code (e.g., "EUR", "JPY").
        default_fraction_digits (int): Number of digits after the decimal point of one minor unit (0-18).
        name (str): Full currency name.
        numeric_code (int | None): ISO 4217 numeric code, if the currency has one.
    """

    __slots__ = ("_code", "_default_fraction_digits", "_name", "_numeric_code")

    # Class-level registry of known currencies, keyed by alphabetic code
    _registry: Dict[str, "Currency"] = {}
    # Alphabetic code <-> ISO numeric code
    _numeric_codes: bidict[str, int] = bidict()

    def __init__(self, code: str, default_fraction_digits: int, name: str, numeric_code: int | None = None):
        """Initialize a Currency instance.

        Args:
            code (str): Alphabetic currency code (e.g., "EUR").
            default_fraction_digits (int): Number of decimal places of the minor unit (0-18).
            name (str): Full currency name.
            numeric_code (int | None): ISO 4217 numeric code.

        Raises:
            ValueError: If parameters are invalid.
        """
        # Validate inputs
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        if not isinstance(default_fraction_digits, int) or isinstance(default_fraction_digits, bool) or not 0 <= default_fraction_digits <= 18:
            raise ValueError(f"$default_fraction_digits must be an integer between 0 and 18, but provided value is: {default_fraction_digits}")

        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        if numeric_code is not None and (not isinstance(numeric_code, int) or not 0 < numeric_code < 1000):
            raise ValueError(f"$numeric_code must be an integer between 1 and 999, but provided value is: {numeric_code}")

        self._code = code.upper().strip()
        self._default_fraction_digits = default_fraction_digits
        self._name = name.strip()
        self._numeric_code = numeric_code

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def default_fraction_digits(self) -> int:
        """Get the number of fraction digits of the currency's minor unit."""
        return self._default_fraction_digits

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def numeric_code(self) -> int | None:
        """Get the ISO 4217 numeric code."""
        return self._numeric_code

    @classmethod
    def register(cls, currency: "Currency", overwrite: bool = False) -> None:
        """Register a currency in the global registry.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to overwrite existing currency.

        Raises:
            ValueError: If currency already exists and overwrite is False, or its numeric code is taken by another currency.
            TypeError: If currency is not Currency instance.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in cls._registry and not overwrite:
            raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")

        if currency.numeric_code is not None:
            owner = cls._numeric_codes.inverse.get(currency.numeric_code)
            if owner is not None and owner != currency.code:
                raise ValueError(f"Numeric code {currency.numeric_code} of '{currency.code}' is already registered for '{owner}'")

        cls._numeric_codes.pop(currency.code, None)
        if currency.numeric_code is not None:
            cls._numeric_codes[currency.code] = currency.numeric_code
        cls._registry[currency.code] = currency
        logger.debug(f"Registered currency '{currency.code}' with {currency.default_fraction_digits} fraction digit(s)")

    @classmethod
    def from_str(cls, code: str) -> "Currency":
        """Get currency from registry by code.

        Args:
            code (str): Currency code to look up.

        Returns:
            Currency: The currency instance.

        Raises:
            ValueError: If currency code is not found in registry.
        """
        if not isinstance(code, str):
            raise TypeError(f"$code must be a string, but provided value is: {code}")

        code = code.upper().strip()
        if code not in cls._registry:
            raise ValueError(f"Currency with code '{code}' not found in registry. Available currencies: {list(cls._registry.keys())}")

        return cls._registry[code]

    @classmethod
    def from_numeric_code(cls, numeric_code: int) -> "Currency":
        """Get currency from registry by ISO 4217 numeric code.

        Raises:
            ValueError: If no registered currency has $numeric_code.
        """
        code = cls._numeric_codes.inverse.get(numeric_code)
        if code is None:
            raise ValueError(f"Currency with numeric code {numeric_code} not found in registry")

        return cls._registry[code]

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __str__(self) -> str:
        """Return string representation."""
        return self.code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.code}', {self.default_fraction_digits}, '{self.name}')"
