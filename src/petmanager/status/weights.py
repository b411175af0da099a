"""
Weight trend aggregation.

Summarises a pet's weight history over a selectable period: the entries in
the window, their average, and the change from first to last reading.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..utils.datetime_utils import ensure_utc, resolve_now

if TYPE_CHECKING:
    from ..schemas.weight import Weight


class WeightPeriod(enum.Enum):
    """Time windows offered by the weight history view."""

    WEEK = "Week"
    MONTH = "Month"
    THREE_MONTHS = "3 Months"
    YEAR = "Year"

    @property
    def window(self) -> timedelta:
        return _PERIOD_WINDOWS[self]


_PERIOD_WINDOWS = {
    WeightPeriod.WEEK: timedelta(days=7),
    WeightPeriod.MONTH: timedelta(days=30),
    WeightPeriod.THREE_MONTHS: timedelta(weeks=12),
    WeightPeriod.YEAR: timedelta(days=365),
}


@dataclass
class WeightTrend:
    """Aggregated weight readings for one period."""

    period: WeightPeriod
    entries: List["Weight"] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def average(self) -> Optional[float]:
        if not self.entries:
            return None
        return sum(e.weight for e in self.entries) / len(self.entries)

    @property
    def change(self) -> float:
        """Last reading minus first reading, 0.0 without readings."""
        if not self.entries:
            return 0.0
        return self.entries[-1].weight - self.entries[0].weight

    @property
    def latest(self) -> Optional[float]:
        return self.entries[-1].weight if self.entries else None

    @property
    def minimum(self) -> Optional[float]:
        return min((e.weight for e in self.entries), default=None)

    @property
    def maximum(self) -> Optional[float]:
        return max((e.weight for e in self.entries), default=None)

    @property
    def is_gaining(self) -> bool:
        return self.change > 0


def summarize_weights(
    weights: Iterable["Weight"],
    period: WeightPeriod = WeightPeriod.MONTH,
    now: Optional[datetime] = None,
) -> WeightTrend:
    """
    Build the weight trend for a period ending at ``now``.

    Args:
        weights: Weight readings in any order
        period: Window to aggregate over
        now: End of the window (defaults to the current UTC time)

    Returns:
        WeightTrend with the in-window readings sorted oldest first
    """
    now = resolve_now(now)
    cutoff = now - period.window
    entries = sorted(
        (w for w in weights if cutoff <= ensure_utc(w.recorded_at) <= now),
        key=lambda w: ensure_utc(w.recorded_at),
    )
    return WeightTrend(period=period, entries=entries)
