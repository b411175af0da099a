"""
Aggregated health record schemas.

``/users/{id}/records`` and ``/pets/{id}/records`` return vaccines,
tablets and appointments together. Items carry the pet's name so a
user-wide list can be rendered without a separate pet lookup, and dates
arrive in a mix of plain-date and datetime layouts.
"""

from typing import List, Optional

from pydantic import Field

from .appointment import AppointmentBase
from .base import APIModel
from .tablet import TabletBase
from .vaccine import VaccineBase


class VaccineRecord(VaccineBase):
    """Vaccine entry of a records response."""

    pet_name: Optional[str] = Field(None, description="Name of the owning pet")


class TabletRecord(TabletBase):
    """Tablet entry of a records response; the start date may be missing."""

    pet_name: Optional[str] = Field(None, description="Name of the owning pet")


class AppointmentRecord(AppointmentBase):
    """Appointment entry of a records response."""

    pet_name: Optional[str] = Field(None, description="Name of the owning pet")


class RecordsResponse(APIModel):
    """Vaccines, tablets and appointments for a user or a single pet."""

    vaccines: List[VaccineRecord] = Field(default_factory=list)
    tablets: List[TabletRecord] = Field(default_factory=list)
    appointments: List[AppointmentRecord] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.vaccines or self.tablets or self.appointments)

    def for_pet(self, pet_id: int) -> "RecordsResponse":
        """Narrow a user-wide response to one pet."""
        return RecordsResponse(
            vaccines=[v for v in self.vaccines if v.pet_id == pet_id],
            tablets=[t for t in self.tablets if t.pet_id == pet_id],
            appointments=[a for a in self.appointments if a.pet_id == pet_id],
        )

    def pet_names(self) -> List[str]:
        """Distinct pet names present in the response, in first-seen order."""
        names: List[str] = []
        for item in [*self.vaccines, *self.tablets, *self.appointments]:
            if item.pet_name and item.pet_name not in names:
                names.append(item.pet_name)
        return names
