"""Medication (tablet) classification."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..utils.datetime_utils import ensure_utc, resolve_now

if TYPE_CHECKING:
    from ..schemas.tablet import TabletBase

# Stand-in for a missing date when ordering.
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _date_or_earliest(value: Optional[datetime]) -> datetime:
    return ensure_utc(value) if value is not None else _EARLIEST


def is_active(tablet: "TabletBase", now: Optional[datetime] = None) -> bool:
    """A medication is active with no end date or an end date not yet passed."""
    if tablet.end_date is None:
        return True
    return ensure_utc(tablet.end_date) >= resolve_now(now)


def active_tablets(
    tablets: Iterable["TabletBase"], now: Optional[datetime] = None
) -> List["TabletBase"]:
    """Active medications, most recently started first."""
    now = resolve_now(now)
    return sorted(
        (t for t in tablets if is_active(t, now)),
        key=lambda t: _date_or_earliest(t.start_date),
        reverse=True,
    )


def ended_tablets(
    tablets: Iterable["TabletBase"], now: Optional[datetime] = None
) -> List["TabletBase"]:
    """Ended medications, most recently ended first."""
    now = resolve_now(now)
    return sorted(
        (t for t in tablets if not is_active(t, now)),
        key=lambda t: _date_or_earliest(t.end_date),
        reverse=True,
    )
