from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful validation carrying the constructed $value."""

    value: T

    @property
    def is_valid(self) -> bool:
        return True

    def get_or_raise(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Validated[U]:
        return Valid(fn(self.value))


@dataclass(frozen=True)
class Invalid:
    """Failed validation carrying every collected error message.

    Attributes:
        errors: Non-empty tuple of human-readable messages, in the order the checks ran.
    """

    errors: tuple[str, ...]

    def __post_init__(self) -> None:
        # Raise: an Invalid without errors would be indistinguishable from success
        if not self.errors:
            raise ValueError("Cannot create `Invalid` because $errors is empty")

    @property
    def is_valid(self) -> bool:
        return False

    def get_or_raise(self):
        """Raise `ValueError` listing all collected errors."""
        raise ValueError("; ".join(self.errors))

    def map(self, fn: Callable) -> Invalid:
        return self


# Result of a validation step: either a value or every error message collected along the way
Validated = Union[Valid[T], Invalid]


def combine(*results: Valid | Invalid) -> Valid[tuple] | Invalid:
    """Combine independent validation results without short-circuiting.

    Every result is inspected; if any is `Invalid`, all their errors are concatenated in order.
    Otherwise the values are returned together as a tuple.

    Args:
        *results: Results of independent validation steps.

    Returns:
        `Valid` with the tuple of all values, or `Invalid` with all errors.
    """
    errors: list[str] = []
    values: list = []
    for result in results:
        if isinstance(result, Invalid):
            errors.extend(result.errors)
        else:
            values.append(result.value)

    if errors:
        return Invalid(tuple(errors))
    return Valid(tuple(values))
