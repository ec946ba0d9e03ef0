"""Season domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Iterator, Optional


class SeasonBaselines(Mapping):
    """
    Read-only map of member id -> portfolio value at season start.

    Every key must belong to a member of the group; this is checked when the
    map is built, so a baseline can never point at an unknown member.
    """

    def __init__(self, values: Mapping, member_ids: Iterable[str]):
        known = set(member_ids)
        unknown = sorted(k for k in values if k not in known)
        if unknown:
            raise ValueError(f"Season baselines reference unknown members: {', '.join(unknown)}")
        self._values: dict[str, Decimal] = {k: Decimal(str(v)) for k, v in values.items()}

    @classmethod
    def empty(cls) -> "SeasonBaselines":
        return cls({}, ())

    def __getitem__(self, member_id: str) -> Decimal:
        return self._values[member_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SeasonBaselines({self._values!r})"

    def without(self, member_id: str) -> "SeasonBaselines":
        """Return a copy with one member's baseline removed."""
        remaining = {k: v for k, v in self._values.items() if k != member_id}
        return SeasonBaselines(remaining, remaining.keys())


@dataclass
class Season:
    """
    A bounded competitive period with its own starting baseline per member.

    end_time of None means the season is still running.
    """

    season_id: str
    name: str
    start_time: datetime
    leader_id: str
    member_snapshots: SeasonBaselines = field(default_factory=SeasonBaselines.empty)
    end_time: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.end_time is None
