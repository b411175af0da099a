"""
Status classification for health records.

Pure functions deriving display statuses from record dates and flags,
plus weight trend aggregation. Every function takes an optional ``now``
so callers and tests can pin the reference instant.
"""

from .appointments import (
    PREVIOUS_LABEL,
    TODAY_LABEL,
    appointment_label,
    days_until,
    is_today,
    is_upcoming,
    past_appointments,
    upcoming_appointments,
)
from .tablets import active_tablets, ended_tablets, is_active
from .vaccines import (
    ConfirmationState,
    VaccineStatus,
    check_confirmation_transition,
    classify_vaccine,
    count_up_to_date,
    group_by_status,
    sort_vaccines,
    vaccine_sort_key,
)
from .weights import WeightPeriod, WeightTrend, summarize_weights

__all__ = [
    # Vaccines
    "ConfirmationState",
    "VaccineStatus",
    "check_confirmation_transition",
    "classify_vaccine",
    "count_up_to_date",
    "group_by_status",
    "sort_vaccines",
    "vaccine_sort_key",
    # Appointments
    "PREVIOUS_LABEL",
    "TODAY_LABEL",
    "appointment_label",
    "days_until",
    "is_today",
    "is_upcoming",
    "past_appointments",
    "upcoming_appointments",
    # Tablets
    "active_tablets",
    "ended_tablets",
    "is_active",
    # Weights
    "WeightPeriod",
    "WeightTrend",
    "summarize_weights",
]
