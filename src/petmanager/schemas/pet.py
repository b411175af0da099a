"""
Pet schemas for API validation and serialization.

The API calls a pet's breed ``species``; in memory it is ``breed``. The
avatar reference ``image_name`` is local to the client and never travels
over the wire.
"""

from datetime import datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import Field, field_validator

from .base import APIModel, ApiDate, RequestModel, UpdateRequestModel

DEFAULT_IMAGE_NAME = "pawprint.circle.fill"


class Pet(APIModel):
    """A pet as returned by the API, plus its local avatar reference."""

    local_only_fields: ClassVar[FrozenSet[str]] = frozenset({"image_name"})

    id: int = Field(..., description="Server-assigned identifier")
    name: str = Field(..., description="Pet's name")
    breed: str = Field(..., alias="species", description="Species or breed")
    age: int = Field(..., description="Age in whole years")
    description: str = Field("", description="Free-text description")
    weight: float = Field(..., description="Weight in kilograms")
    gender: str = Field(..., description="Pet's gender")
    color: Optional[str] = Field(None, description="Coat color")
    birthday: Optional[ApiDate] = Field(None, description="Date of birth")
    image_name: str = Field(
        DEFAULT_IMAGE_NAME, exclude=True, description="Local avatar reference"
    )

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name='{self.name}', breed='{self.breed}')>"


class PetCreate(RequestModel):
    """Schema for creating a new pet."""

    name: str = Field(..., min_length=1, max_length=100)
    breed: str = Field(..., alias="species", min_length=1, max_length=100)
    age: int = Field(..., ge=0, le=50)
    description: str = Field("")
    weight: float = Field(..., ge=0)
    gender: str = Field(..., min_length=1)
    color: Optional[str] = Field(None, max_length=50)
    birthday: Optional[ApiDate] = Field(None)

    @field_validator("birthday")
    @classmethod
    def validate_birthday(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Birthdays cannot be in the future."""
        if v is not None and v > datetime.now(v.tzinfo):
            raise ValueError("Birthday cannot be in the future")
        return v


class PetUpdate(UpdateRequestModel):
    """Schema for a partial pet update; unset fields are not sent."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    breed: Optional[str] = Field(None, alias="species", min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=50)
    description: Optional[str] = None
    weight: Optional[float] = Field(None, ge=0)
    gender: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, max_length=50)
    birthday: Optional[ApiDate] = None
