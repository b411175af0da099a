"""Tablet (medication) schemas for API validation and serialization."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ..status.tablets import is_active
from .base import APIModel, ApiDate, RequestModel, UpdateRequestModel


class TabletBase(APIModel):
    """Fields shared by tablets and tablet records."""

    id: int = Field(..., description="Server-assigned identifier")
    name: str = Field(..., description="Medication name")
    dosage: Optional[str] = Field(None, description="Dosage")
    frequency: Optional[str] = Field(None, description="Dosing frequency")
    start_date: Optional[ApiDate] = Field(None, description="First day")
    end_date: Optional[ApiDate] = Field(None, description="Last day")
    notes: Optional[str] = Field(None, description="Additional notes")
    pet_id: int = Field(..., description="Owning pet")

    @property
    def is_active(self) -> bool:
        """True with no end date or an end date that has not passed."""
        return is_active(self)


class Tablet(TabletBase):
    """A medication as returned by ``/pets/{id}/tablets``."""

    start_date: ApiDate = Field(..., description="First day")

    def __repr__(self) -> str:
        return f"<Tablet(id={self.id}, name='{self.name}', active={self.is_active})>"


def _check_end_after_start(
    start: Optional[datetime], end: Optional[datetime]
) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError("End date cannot be before the start date")


class TabletCreate(RequestModel):
    """Schema for adding a medication for a pet."""

    name: str = Field(..., min_length=1, max_length=200)
    dosage: Optional[str] = Field(None, max_length=100)
    frequency: Optional[str] = Field(None, max_length=100)
    start_date: ApiDate = Field(...)
    end_date: Optional[ApiDate] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_dates(self) -> "TabletCreate":
        _check_end_after_start(self.start_date, self.end_date)
        return self


class TabletUpdate(UpdateRequestModel):
    """Schema for a partial medication update; unset fields are not sent."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    dosage: Optional[str] = Field(None, max_length=100)
    frequency: Optional[str] = Field(None, max_length=100)
    start_date: Optional[ApiDate] = None
    end_date: Optional[ApiDate] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_dates(self) -> "TabletUpdate":
        _check_end_after_start(self.start_date, self.end_date)
        return self
