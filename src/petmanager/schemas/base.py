"""
Shared building blocks for the API schemas.

Defines the date field types used on the wire and the base classes for
response models and request payloads.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, FrozenSet

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
    ValidationInfo,
    model_validator,
)

from ..utils.datetime_utils import (
    coerce_api_datetime,
    format_api_date,
    format_api_datetime,
)

# Date-only wire fields: accept any supported layout, emit YYYY-MM-DD.
ApiDate = Annotated[
    datetime,
    BeforeValidator(coerce_api_datetime),
    PlainSerializer(format_api_date, return_type=str, when_used="json"),
]

# Timestamp wire fields: accept any supported layout, emit ISO-8601 UTC.
ApiDateTime = Annotated[
    datetime,
    BeforeValidator(coerce_api_datetime),
    PlainSerializer(format_api_datetime, return_type=str, when_used="json"),
]

API_CONTEXT: Dict[str, str] = {"source": "api"}


class APIModel(BaseModel):
    """
    Base class for entities decoded from API responses.

    Fields listed in ``local_only_fields`` live only on the client: they are
    excluded when serializing and dropped from payloads validated with
    ``API_CONTEXT``.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    local_only_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def drop_local_only_fields(cls, data: Any, info: ValidationInfo) -> Any:
        """Ignore client-only fields when the payload comes from the server."""
        if (
            cls.local_only_fields
            and isinstance(data, dict)
            and info.context
            and info.context.get("source") == API_CONTEXT["source"]
        ):
            return {k: v for k, v in data.items() if k not in cls.local_only_fields}
        return data

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True)


class RequestModel(BaseModel):
    """Base class for create request payloads."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True)


class UpdateRequestModel(RequestModel):
    """
    Base class for partial update payloads.

    Every field is optional; only fields that were explicitly set are sent,
    so an explicit ``None`` clears a value while an unset field is untouched.
    """

    @model_validator(mode="after")
    def validate_at_least_one_field(self) -> "UpdateRequestModel":
        """Ensure at least one field is provided for update."""
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def to_payload(self) -> Dict[str, Any]:
        """Serialize only the fields that were explicitly set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
