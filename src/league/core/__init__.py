"""Core utilities and shared functionality."""

from league.core.timezone import (
    now_eastern,
    to_eastern,
    to_naive_eastern,
    same_eastern_day,
    parse_datetime_eastern,
    EASTERN_TZ,
)
from league.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
)
from league.core.results import FailureReason, OperationResult

__all__ = [
    "now_eastern",
    "to_eastern",
    "to_naive_eastern",
    "same_eastern_day",
    "parse_datetime_eastern",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "FailureReason",
    "OperationResult",
]
