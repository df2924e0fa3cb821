"""
Operation results.

Expected failures (bad input, overlaps, unknown ids) travel back to the
caller as values rather than exceptions, so a form can show the message
without a try/except around every submit.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import DomainError

T = TypeVar("T")
E = TypeVar("E", bound=DomainError)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Either a successful value or a typed domain error."""

    value: T | None = None
    error: E | None = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("Result must carry exactly one of value or error")

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: E) -> "Result[T, E]":
        return cls(error=error)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """Display message for the failure, empty on success."""
        return self.error.message if self.error is not None else ""

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
