"""
Appointment schemas for API validation and serialization.

The server emits appointment timestamps as naive datetimes with
microseconds; they are read as UTC and sent back as ISO-8601.
"""

import enum
from typing import Optional

from pydantic import Field, field_validator

from .base import APIModel, ApiDateTime, RequestModel, UpdateRequestModel


class AppointmentStatus(enum.Enum):
    """Well-known appointment statuses; the wire field is free-form text."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _normalize_status(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip().lower()
    if not v:
        raise ValueError("Appointment status cannot be empty")
    return v


class AppointmentBase(APIModel):
    """Fields shared by appointments and appointment records."""

    id: int = Field(..., description="Server-assigned identifier")
    appointment_date: ApiDateTime = Field(..., description="Date and time")
    reason: str = Field(..., description="Reason for the visit")
    vet_name: Optional[str] = Field(None, description="Attending veterinarian")
    location: Optional[str] = Field(None, description="Clinic or address")
    status: str = Field(
        AppointmentStatus.SCHEDULED.value, description="Appointment status"
    )
    pet_id: int = Field(..., description="Owning pet")


class Appointment(AppointmentBase):
    """An appointment as returned by ``/pets/{id}/appointments``."""

    notes: Optional[str] = Field(None, description="Additional notes")

    def __repr__(self) -> str:
        return (
            f"<Appointment(id={self.id}, pet_id={self.pet_id}, "
            f"appointment_date='{self.appointment_date}', status='{self.status}')>"
        )


class AppointmentCreate(RequestModel):
    """Schema for creating an appointment for a pet."""

    appointment_date: ApiDateTime = Field(...)
    reason: str = Field(..., min_length=1, max_length=500)
    vet_name: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None
    status: str = Field(AppointmentStatus.SCHEDULED.value)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return _normalize_status(v)


class AppointmentUpdate(UpdateRequestModel):
    """Schema for a partial appointment update; unset fields are not sent."""

    appointment_date: Optional[ApiDateTime] = None
    reason: Optional[str] = Field(None, min_length=1, max_length=500)
    vet_name: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = None
    status: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_status(v)
