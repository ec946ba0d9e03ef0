"""Enumerations for domain models."""

from enum import Enum


class AssetClass(str, Enum):
    """Kinds of securities a member can hold."""

    STOCK = "STOCK"
    CRYPTO = "CRYPTO"
    ETF = "ETF"
    OTHER = "OTHER"


class ActivityType(str, Enum):
    """Types of activity log entries."""

    BUY = "BUY"
    SELL = "SELL"
    UPDATE = "UPDATE"
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    JOIN = "JOIN"
    GROUP_CREATED = "GROUP_CREATED"
    SEASON_STARTED = "SEASON_STARTED"
    SEASON_ENDED = "SEASON_ENDED"
    NOTE = "NOTE"


class SnapshotScope(str, Enum):
    """Whether a snapshot values one member or the whole group."""

    USER = "user"
    GROUP = "group"


class SnapshotPolicy(str, Enum):
    """How a new snapshot is merged into an entity's history."""

    APPEND = "append"  # every mutation adds a point
    COALESCE_DAILY = "coalesce_daily"  # same-day points replace the last one


class WithdrawalPolicy(str, Enum):
    """How withdrawals larger than the cash balance are handled."""

    CLAMP = "clamp"
    REJECT = "reject"


class WithdrawalOutcome(str, Enum):
    """What actually happened to a withdrawal request."""

    APPLIED = "APPLIED"
    CLAMPED = "CLAMPED"
    REJECTED = "REJECTED"


class MetricsMode(str, Enum):
    """Baseline used for P&L figures."""

    ALL_TIME = "allTime"
    SEASON = "season"


class BaselineSource(str, Enum):
    """Which fallback tier produced a baseline value."""

    INITIAL_VALUE = "INITIAL_VALUE"
    INITIAL_CAPITAL = "INITIAL_CAPITAL"
    EARLIEST_SNAPSHOT = "EARLIEST_SNAPSHOT"
    COMPUTED = "COMPUTED"
    SEASON_SNAPSHOT = "SEASON_SNAPSHOT"
    NEAREST_SNAPSHOT = "NEAREST_SNAPSHOT"
    CURRENT_VALUE = "CURRENT_VALUE"


class ChartRange(str, Enum):
    """Time windows offered by performance charts."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    ONE_YEAR = "1Y"
    ALL = "ALL"
