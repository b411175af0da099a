"""
Stores for a pet's appointments, vaccines, tablets and weights, and for
the aggregated records view.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from ..client import PetManagerClient
from ..schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    RecordsResponse,
    Tablet,
    TabletCreate,
    TabletUpdate,
    Vaccine,
    VaccineCreate,
    VaccineUpdate,
    Weight,
    WeightCreate,
    WeightUpdate,
)
from ..status import (
    ConfirmationState,
    VaccineStatus,
    WeightPeriod,
    WeightTrend,
    active_tablets,
    appointment_label,
    check_confirmation_transition,
    count_up_to_date,
    days_until,
    ended_tablets,
    group_by_status,
    is_today,
    past_appointments,
    sort_vaccines,
    summarize_weights,
    upcoming_appointments,
)
from .base import CollectionStore, ObservableStore

logger = logging.getLogger(__name__)


class AppointmentStore(CollectionStore[Appointment]):
    """A pet's appointments, split into upcoming and past."""

    def __init__(
        self,
        client: PetManagerClient,
        pet_id: Optional[int] = None,
        timezone: Optional[str] = None,
    ):
        super().__init__(client, pet_id)
        self.timezone = timezone or client.config.timezone

    def _fetch(self, pet_id: int) -> List[Appointment]:
        return self.client.fetch_appointments(pet_id)

    def _create(self, pet_id: int, request: AppointmentCreate) -> Appointment:
        return self.client.create_appointment(pet_id, request)

    def _update(self, item_id: int, request: AppointmentUpdate) -> Appointment:
        return self.client.update_appointment(item_id, request)

    def _remove(self, item_id: int) -> None:
        self.client.delete_appointment(item_id)

    @property
    def appointments(self) -> List[Appointment]:
        return self.items

    def upcoming(self, now: Optional[datetime] = None) -> List[Appointment]:
        """Upcoming appointments, soonest first."""
        return upcoming_appointments(self.items, now, self.timezone)

    def past(self, now: Optional[datetime] = None) -> List[Appointment]:
        """Past appointments, most recent first."""
        return past_appointments(self.items, now, self.timezone)

    def is_today(
        self, appointment: Appointment, now: Optional[datetime] = None
    ) -> bool:
        return is_today(appointment, now, self.timezone)

    def label(self, appointment: Appointment, now: Optional[datetime] = None) -> str:
        """Badge text for an appointment, judged in the store's timezone."""
        return appointment_label(appointment, now, self.timezone)

    def days_until(
        self, appointment: Appointment, now: Optional[datetime] = None
    ) -> Optional[int]:
        return days_until(appointment, now, self.timezone)


class VaccineStore(CollectionStore[Vaccine]):
    """A pet's vaccines with confirmation actions."""

    def _fetch(self, pet_id: int) -> List[Vaccine]:
        return self.client.fetch_vaccines(pet_id)

    def _create(self, pet_id: int, request: VaccineCreate) -> Vaccine:
        return self.client.create_vaccine(pet_id, request)

    def _update(self, item_id: int, request: VaccineUpdate) -> Vaccine:
        return self.client.update_vaccine(item_id, request)

    def _remove(self, item_id: int) -> None:
        self.client.delete_vaccine(item_id)

    @property
    def vaccines(self) -> List[Vaccine]:
        return self.items

    @property
    def up_to_date_count(self) -> int:
        return count_up_to_date(self.items)

    def sorted_vaccines(self, now: Optional[datetime] = None) -> List[Vaccine]:
        """Vaccines in display order, actionable ones first."""
        return sort_vaccines(self.items, now)

    def by_status(
        self, now: Optional[datetime] = None
    ) -> Dict[VaccineStatus, List[Vaccine]]:
        return group_by_status(self.items, now)

    def set_confirmation(
        self,
        vaccine: Vaccine,
        state: ConfirmationState,
        now: Optional[datetime] = None,
    ) -> Optional[Vaccine]:
        """
        Record the owner's confirmation for a vaccine.

        The transition is validated locally before anything is sent.

        Raises:
            StatusTransitionException: If the vaccine cannot move to ``state``
        """
        current = check_confirmation_transition(vaccine, state, now)
        logger.info(
            f"Vaccine {vaccine.id}: {current.value} -> {state.value}",
            extra={"vaccine_id": vaccine.id, "pet_id": vaccine.pet_id},
        )
        return self.update(vaccine.id, VaccineUpdate.for_confirmation(state))

    def confirm(
        self, vaccine: Vaccine, now: Optional[datetime] = None
    ) -> Optional[Vaccine]:
        """Mark a vaccine as given and up to date."""
        return self.set_confirmation(vaccine, ConfirmationState.CONFIRMED, now)

    def mark_missed(
        self, vaccine: Vaccine, now: Optional[datetime] = None
    ) -> Optional[Vaccine]:
        """Mark a vaccine as missed."""
        return self.set_confirmation(vaccine, ConfirmationState.MISSED, now)


class TabletStore(CollectionStore[Tablet]):
    """A pet's medications, split into active and ended."""

    def _fetch(self, pet_id: int) -> List[Tablet]:
        return self.client.fetch_tablets(pet_id)

    def _create(self, pet_id: int, request: TabletCreate) -> Tablet:
        return self.client.create_tablet(pet_id, request)

    def _update(self, item_id: int, request: TabletUpdate) -> Tablet:
        return self.client.update_tablet(item_id, request)

    def _remove(self, item_id: int) -> None:
        self.client.delete_tablet(item_id)

    @property
    def tablets(self) -> List[Tablet]:
        return self.items

    def active(self, now: Optional[datetime] = None) -> List[Tablet]:
        return active_tablets(self.items, now)

    def ended(self, now: Optional[datetime] = None) -> List[Tablet]:
        return ended_tablets(self.items, now)


class WeightStore(CollectionStore[Weight]):
    """A pet's weight history."""

    def _fetch(self, pet_id: int) -> List[Weight]:
        return self.client.fetch_weights(pet_id)

    def _create(self, pet_id: int, request: WeightCreate) -> Weight:
        return self.client.create_weight(pet_id, request)

    def _update(self, item_id: int, request: WeightUpdate) -> Weight:
        return self.client.update_weight(item_id, request)

    def _remove(self, item_id: int) -> None:
        self.client.delete_weight(item_id)

    @property
    def weights(self) -> List[Weight]:
        return self.items

    def trend(
        self,
        period: WeightPeriod = WeightPeriod.MONTH,
        now: Optional[datetime] = None,
    ) -> WeightTrend:
        return summarize_weights(self.items, period, now)


class RecordsStore(ObservableStore):
    """Aggregated vaccines, tablets and appointments for a user or a pet."""

    def __init__(self, client: PetManagerClient):
        super().__init__(client)
        self.records = RecordsResponse()

    def _load(self, description: str, fetch) -> bool:
        token = self._begin_load()
        try:
            records = self._attempt("load", fetch)
        finally:
            self._finish_load(token)

        if records is None:
            return False
        if not self._is_current(token):
            logger.debug(f"Discarding stale records load for {description}")
            return False

        self._publish("records", records)
        return True

    def load_for_user(self, user_id: int) -> bool:
        return self._load(
            f"user {user_id}", lambda: self.client.fetch_user_records(user_id)
        )

    def load_for_pet(self, pet_id: int) -> bool:
        return self._load(
            f"pet {pet_id}", lambda: self.client.fetch_pet_records(pet_id)
        )
