"""Process-wide settings for the money engine.

Settings are an immutable snapshot. `configure` swaps the active snapshot in a single
reference assignment, so readers on other threads see either the old or the new settings,
never a mix of both.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

from money_core.domain.monetary.rounding import RoundingMode

logger = logging.getLogger(__name__)

ENV_PREFIX = "MONEY_CORE_"


@dataclass(frozen=True)
class MoneySettings:
    """Rounding defaults used where the caller does not pass a mode explicitly.

    Attributes:
        default_rounding_mode: Mode used by Python operators (`+`, `-`, `*`, `%`, `divmod`), which cannot take a mode argument.
        addition_rounding_mode: Mode used by cent-precision addition, regardless of the mode the caller passes.
            Kept HALF_EVEN for compatibility with amounts computed by earlier releases.
        precise_cent_rounding_mode: Mode used to derive the cent amount in `HighPrecisionMoney.from_precise_amount`
            when no explicit cent amount is supplied.
    """

    default_rounding_mode: RoundingMode = RoundingMode.HALF_EVEN
    addition_rounding_mode: RoundingMode = RoundingMode.HALF_EVEN
    precise_cent_rounding_mode: RoundingMode = RoundingMode.HALF_EVEN

    def __post_init__(self) -> None:
        for field_name in ("default_rounding_mode", "addition_rounding_mode", "precise_cent_rounding_mode"):
            value = getattr(self, field_name)
            # Raise: every field must be a RoundingMode so arithmetic never sees a raw string
            if not isinstance(value, RoundingMode):
                raise TypeError(f"Cannot create `MoneySettings` because ${field_name} is not RoundingMode (got type '{type(value).__name__}')")


_settings = MoneySettings()


def get_settings() -> MoneySettings:
    """Return the active settings snapshot."""
    return _settings


def configure(settings: MoneySettings | None = None, **overrides: RoundingMode) -> MoneySettings:
    """Replace the active settings.

    Args:
        settings: New snapshot. If None, the current snapshot is used as base.
        **overrides: Individual fields to replace on top of $settings.

    Returns:
        MoneySettings: The snapshot that is now active.
    """
    global _settings

    base = _settings if settings is None else settings
    new_settings = replace(base, **overrides) if overrides else base
    _settings = new_settings
    logger.info(f"Configured money settings: {new_settings}")
    return new_settings


def load_settings(env_file: str | Path | None = None) -> MoneySettings:
    """Build settings from `MONEY_CORE_*` environment variables.

    Variables (values are rounding-mode names, e.g. "HALF_UP"):
    - MONEY_CORE_DEFAULT_ROUNDING_MODE
    - MONEY_CORE_ADDITION_ROUNDING_MODE
    - MONEY_CORE_PRECISE_CENT_ROUNDING_MODE

    Args:
        env_file: Optional `.env` file loaded first; variables already present in the environment win.

    Returns:
        MoneySettings: Settings with unset variables left at their defaults. The active settings are not changed;
        pass the result to `configure` to apply them.

    Raises:
        ValueError: If a variable holds an unknown rounding-mode name.
    """
    if env_file is not None:
        loaded = load_dotenv(env_file, override=False)
        logger.debug(f"Loaded env file '{env_file}': {loaded}")

    values = {}
    for field_name in ("default_rounding_mode", "addition_rounding_mode", "precise_cent_rounding_mode"):
        raw = os.environ.get(ENV_PREFIX + field_name.upper())
        if raw:
            values[field_name] = RoundingMode.from_str(raw)

    settings = MoneySettings(**values)
    logger.info(f"Loaded money settings from environment: {settings}")
    return settings
