"""Typed operation outcomes returned by the portfolio and season ledgers.

Failures that callers are expected to branch on (insufficient funds, a
non-leader trying to start a season, a member that vanished between reads) are
returned as values rather than raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureReason(str, Enum):
    """Why an operation was refused."""

    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    UNAUTHORIZED = "UNAUTHORIZED"
    SEASON_ALREADY_ACTIVE = "SEASON_ALREADY_ACTIVE"
    NO_ACTIVE_SEASON = "NO_ACTIVE_SEASON"
    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a ledger operation: a value on success, a reason on failure."""

    value: Optional[T] = None
    failure: Optional[FailureReason] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Return True if the operation was applied."""
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def fail(
        cls,
        reason: FailureReason,
        message: str,
        value: Optional[T] = None,
    ) -> "OperationResult[T]":
        return cls(value=value, failure=reason, message=message)
