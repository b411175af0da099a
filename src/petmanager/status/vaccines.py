"""
Vaccine status classification.

A vaccine's display status is derived from its administered date and the
tri-state confirmation flag. Actionable items sort first.
"""

import enum
from collections import OrderedDict
from datetime import datetime
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ..exceptions import StatusTransitionException
from ..utils.datetime_utils import ensure_utc, resolve_now

if TYPE_CHECKING:
    from ..schemas.vaccine import VaccineBase


class ConfirmationState(enum.Enum):
    """Owner confirmation of a vaccine, mirroring the nullable ``up_to_date`` flag."""

    CONFIRMED = "confirmed"
    MISSED = "missed"
    PENDING = "pending"

    @classmethod
    def from_flag(cls, flag: Optional[bool]) -> "ConfirmationState":
        """Map the wire flag (true / false / null) to a state."""
        if flag is None:
            return cls.PENDING
        return cls.CONFIRMED if flag else cls.MISSED

    def to_flag(self) -> Optional[bool]:
        """Map the state back to the wire flag."""
        if self is ConfirmationState.PENDING:
            return None
        return self is ConfirmationState.CONFIRMED


class VaccineStatus(enum.Enum):
    """Display status of a vaccine."""

    NEEDS_CONFIRMATION = "needs_confirmation"
    MISSED = "missed"
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def priority(self) -> int:
        """Sort priority, lower values are shown first."""
        return _STATUS_PRIORITY[self]


_STATUS_LABELS = {
    VaccineStatus.NEEDS_CONFIRMATION: "Needs Confirmation",
    VaccineStatus.MISSED: "Missed",
    VaccineStatus.SCHEDULED: "Scheduled",
    VaccineStatus.CONFIRMED: "Confirmed",
}

_STATUS_PRIORITY = {
    VaccineStatus.NEEDS_CONFIRMATION: 0,
    VaccineStatus.MISSED: 1,
    VaccineStatus.SCHEDULED: 2,
    VaccineStatus.CONFIRMED: 3,
}

# Allowed confirmation changes keyed by the current display status.
_ALLOWED_TRANSITIONS = {
    VaccineStatus.NEEDS_CONFIRMATION: {
        ConfirmationState.CONFIRMED,
        ConfirmationState.MISSED,
    },
    VaccineStatus.MISSED: {ConfirmationState.CONFIRMED},
    VaccineStatus.CONFIRMED: {ConfirmationState.MISSED},
    VaccineStatus.SCHEDULED: set(),
}


def classify_vaccine(
    vaccine: "VaccineBase", now: Optional[datetime] = None
) -> VaccineStatus:
    """
    Derive the display status of a vaccine.

    A future administered date always means Scheduled; otherwise the
    confirmation state decides.

    Args:
        vaccine: Vaccine or vaccine record
        now: Reference instant (defaults to the current UTC time)

    Returns:
        The vaccine's status
    """
    now = resolve_now(now)
    if ensure_utc(vaccine.administered_date) > now:
        return VaccineStatus.SCHEDULED

    state = ConfirmationState.from_flag(vaccine.up_to_date)
    if state is ConfirmationState.CONFIRMED:
        return VaccineStatus.CONFIRMED
    if state is ConfirmationState.MISSED:
        return VaccineStatus.MISSED
    return VaccineStatus.NEEDS_CONFIRMATION


def vaccine_sort_key(vaccine: "VaccineBase", now: Optional[datetime] = None):
    """Sort key: status priority, then administered date ascending."""
    return (
        classify_vaccine(vaccine, now).priority,
        ensure_utc(vaccine.administered_date),
    )


def sort_vaccines(
    vaccines: Iterable["VaccineBase"], now: Optional[datetime] = None
) -> List["VaccineBase"]:
    """Order vaccines for display, actionable ones first."""
    now = resolve_now(now)
    return sorted(vaccines, key=lambda v: vaccine_sort_key(v, now))


def group_by_status(
    vaccines: Iterable["VaccineBase"], now: Optional[datetime] = None
) -> Dict[VaccineStatus, List["VaccineBase"]]:
    """Bucket vaccines by status, buckets in priority order and each sorted."""
    now = resolve_now(now)
    groups: Dict[VaccineStatus, List["VaccineBase"]] = OrderedDict(
        (status, []) for status in sorted(VaccineStatus, key=lambda s: s.priority)
    )
    for vaccine in sort_vaccines(vaccines, now):
        groups[classify_vaccine(vaccine, now)].append(vaccine)
    return groups


def count_up_to_date(vaccines: Iterable["VaccineBase"]) -> int:
    """Count vaccines explicitly confirmed as up to date."""
    return sum(1 for v in vaccines if v.up_to_date is True)


def check_confirmation_transition(
    vaccine: "VaccineBase",
    target: ConfirmationState,
    now: Optional[datetime] = None,
) -> VaccineStatus:
    """
    Validate a confirmation change before it is sent to the server.

    Args:
        vaccine: The vaccine being changed
        target: Requested confirmation state
        now: Reference instant

    Returns:
        The vaccine's current status

    Raises:
        StatusTransitionException: If the change is not permitted
    """
    current = classify_vaccine(vaccine, now)

    if target is ConfirmationState.PENDING:
        raise StatusTransitionException(
            "A vaccine cannot be reset to pending confirmation",
            current_status=current.value,
            target_status=target.value,
            record_id=getattr(vaccine, "id", None),
        )

    if target not in _ALLOWED_TRANSITIONS[current]:
        if current is VaccineStatus.SCHEDULED:
            message = "Scheduled vaccines can only be confirmed after their date"
        else:
            message = f"Vaccine is already {current.label.lower()}"
        raise StatusTransitionException(
            message,
            current_status=current.value,
            target_status=target.value,
            record_id=getattr(vaccine, "id", None),
        )

    return current
