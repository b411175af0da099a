"""Weight reading schemas for API validation and serialization."""

from typing import Optional

from pydantic import Field

from .base import APIModel, ApiDateTime, RequestModel, UpdateRequestModel


class Weight(APIModel):
    """A weight reading as returned by ``/pets/{id}/weights``."""

    id: int = Field(..., description="Server-assigned identifier")
    weight: float = Field(..., description="Weight in kilograms")
    recorded_at: ApiDateTime = Field(..., description="When it was measured")
    notes: Optional[str] = Field(None, description="Additional notes")
    pet_id: int = Field(..., description="Owning pet")

    def __repr__(self) -> str:
        return f"<Weight(id={self.id}, weight={self.weight}, recorded_at='{self.recorded_at}')>"


class WeightCreate(RequestModel):
    """Schema for recording a weight; the server stamps ``recorded_at`` if omitted."""

    weight: float = Field(..., gt=0, le=999.99)
    notes: Optional[str] = None
    recorded_at: Optional[ApiDateTime] = None

    def to_payload(self):
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class WeightUpdate(UpdateRequestModel):
    """Schema for a partial weight update; unset fields are not sent."""

    weight: Optional[float] = Field(None, gt=0, le=999.99)
    notes: Optional[str] = None
    recorded_at: Optional[ApiDateTime] = None
