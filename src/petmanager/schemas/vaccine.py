"""
Vaccine schemas for API validation and serialization.

``up_to_date`` is tri-state on the wire: true (confirmed), false (missed)
or null (pending). In memory it is also exposed as a ConfirmationState.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ..status.vaccines import ConfirmationState, VaccineStatus, classify_vaccine
from ..utils.datetime_utils import ensure_utc, get_current_utc
from .base import APIModel, ApiDate, RequestModel, UpdateRequestModel


class VaccineBase(APIModel):
    """Fields shared by vaccines and vaccine records."""

    id: int = Field(..., description="Server-assigned identifier")
    name: str = Field(..., description="Vaccine name")
    administered_date: ApiDate = Field(..., description="Date administered")
    next_due_date: Optional[ApiDate] = Field(None, description="Next due date")
    administered_by: Optional[str] = Field(None, description="Administering vet")
    frequency: Optional[str] = Field(None, description="Frequency label")
    up_to_date: Optional[bool] = Field(None, description="Confirmation flag")
    pet_id: int = Field(..., description="Owning pet")

    @property
    def confirmation(self) -> ConfirmationState:
        return ConfirmationState.from_flag(self.up_to_date)

    @property
    def is_up_to_date(self) -> bool:
        """True only when explicitly confirmed."""
        return self.up_to_date is True

    @property
    def needs_confirmation(self) -> bool:
        """True once the date has passed without a confirmation either way."""
        return (
            ensure_utc(self.administered_date) <= get_current_utc()
            and self.up_to_date is None
        )

    @property
    def was_missed(self) -> bool:
        return self.up_to_date is False

    @property
    def status(self) -> VaccineStatus:
        return classify_vaccine(self)


class Vaccine(VaccineBase):
    """A vaccine as returned by ``/pets/{id}/vaccines``."""

    notes: Optional[str] = Field(None, description="Additional notes")

    def __repr__(self) -> str:
        return (
            f"<Vaccine(id={self.id}, name='{self.name}', "
            f"administered_date='{self.administered_date.date()}', "
            f"up_to_date={self.up_to_date})>"
        )


def _check_due_after_administered(
    administered: Optional[datetime], due: Optional[datetime]
) -> None:
    if administered is not None and due is not None and due < administered:
        raise ValueError("Next due date cannot be before the administered date")


class VaccineCreate(RequestModel):
    """Schema for recording a vaccine for a pet."""

    name: str = Field(..., min_length=1, max_length=200)
    administered_date: ApiDate = Field(...)
    next_due_date: Optional[ApiDate] = None
    administered_by: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None
    frequency: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="after")
    def validate_dates(self) -> "VaccineCreate":
        _check_due_after_administered(self.administered_date, self.next_due_date)
        return self


class VaccineUpdate(UpdateRequestModel):
    """Schema for a partial vaccine update; unset fields are not sent."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    administered_date: Optional[ApiDate] = None
    next_due_date: Optional[ApiDate] = None
    administered_by: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None
    frequency: Optional[str] = Field(None, max_length=100)
    up_to_date: Optional[bool] = None

    @model_validator(mode="after")
    def validate_dates(self) -> "VaccineUpdate":
        _check_due_after_administered(self.administered_date, self.next_due_date)
        return self

    @classmethod
    def for_confirmation(cls, state: ConfirmationState) -> "VaccineUpdate":
        """Build the PATCH body that records a confirmation state."""
        return cls(up_to_date=state.to_flag())
