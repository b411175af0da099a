"""
Appointment classification.

Appointments are upcoming from the start of their calendar day, so an
appointment earlier today still counts as upcoming.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..utils.datetime_utils import (
    ensure_utc,
    is_same_day,
    resolve_now,
    start_of_day,
    whole_days_between,
)

if TYPE_CHECKING:
    from ..schemas.appointment import AppointmentBase

TODAY_LABEL = "Today"
PREVIOUS_LABEL = "Previous"


def is_upcoming(
    appointment: "AppointmentBase", now: Optional[datetime] = None, tz: str = "UTC"
) -> bool:
    """True if the appointment's calendar day is today or later."""
    now = resolve_now(now)
    return start_of_day(appointment.appointment_date, tz) >= start_of_day(now, tz)


def is_today(
    appointment: "AppointmentBase", now: Optional[datetime] = None, tz: str = "UTC"
) -> bool:
    """True if the appointment falls on the current calendar day."""
    return is_same_day(appointment.appointment_date, resolve_now(now), tz)


def appointment_label(
    appointment: "AppointmentBase", now: Optional[datetime] = None, tz: str = "UTC"
) -> str:
    """
    Get the badge text for an appointment.

    "Today" wins, past appointments read "Previous", and upcoming ones show
    their own status capitalised.
    """
    now = resolve_now(now)
    if is_today(appointment, now, tz):
        return TODAY_LABEL
    if not is_upcoming(appointment, now, tz):
        return PREVIOUS_LABEL
    return appointment.status.capitalize()


def days_until(
    appointment: "AppointmentBase", now: Optional[datetime] = None, tz: str = "UTC"
) -> Optional[int]:
    """Whole days from now until the appointment, or None once it is past."""
    now = resolve_now(now)
    if not is_upcoming(appointment, now, tz):
        return None
    return whole_days_between(now, appointment.appointment_date)


def upcoming_appointments(
    appointments: Iterable["AppointmentBase"],
    now: Optional[datetime] = None,
    tz: str = "UTC",
) -> List["AppointmentBase"]:
    """Upcoming appointments, soonest first."""
    now = resolve_now(now)
    return sorted(
        (a for a in appointments if is_upcoming(a, now, tz)),
        key=lambda a: ensure_utc(a.appointment_date),
    )


def past_appointments(
    appointments: Iterable["AppointmentBase"],
    now: Optional[datetime] = None,
    tz: str = "UTC",
) -> List["AppointmentBase"]:
    """Past appointments, most recent first."""
    now = resolve_now(now)
    return sorted(
        (a for a in appointments if not is_upcoming(a, now, tz)),
        key=lambda a: ensure_utc(a.appointment_date),
        reverse=True,
    )
