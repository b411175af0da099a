"""
HTTP client for the pet-management REST API.

This module translates entity CRUD operations into requests against the
configured base URL, and decodes responses into the package schemas with
tolerant date parsing. Failures are raised as typed exceptions:
TransportException, HTTPStatusException or DecodeException.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from ..exceptions import (
    DateParseException,
    DecodeException,
    HTTPStatusException,
    TransportException,
    format_validation_errors,
)
from ..schemas import (
    API_CONTEXT,
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    Pet,
    PetCreate,
    PetUpdate,
    RecordsResponse,
    RequestModel,
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
from ..utils.config import ClientConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def _schema_name(schema: Any) -> str:
    return getattr(schema, "__name__", None) or str(schema)


class PetManagerClient:
    """
    Client for the pet-management API.

    One ``requests.Session`` is held per client; use the client as a
    context manager or call ``close()`` when done.

    Example:
        >>> with PetManagerClient() as client:
        ...     pets = client.fetch_pets(user_id=1)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration (defaults to ``ClientConfig()``)
            session: Pre-built session, mainly for tests
        """
        self.config = config or ClientConfig()
        self.session = session or requests.Session()
        self.session.headers.update(JSON_HEADERS)

    def __enter__(self) -> "PetManagerClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def build_url(self, *parts: Any) -> str:
        """Join path segments onto the base URL."""
        path = "/".join(str(part).strip("/") for part in parts)
        return f"{self.base_url}/{path}"

    # Transport

    def _request(
        self,
        method: str,
        url: str,
        body: Optional[RequestModel] = None,
    ) -> requests.Response:
        """
        Send a request and return the response once it is known to be 2xx.

        Raises:
            TransportException: If no response was received
            HTTPStatusException: If the status is outside 200-299
        """
        payload: Optional[Dict[str, Any]] = body.to_payload() if body else None
        logger.debug(
            f"{method} {url}",
            extra={"method": method, "url": url, "payload": payload},
        )

        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers=JSON_HEADERS,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            error = TransportException(
                f"{method} {url} failed: {e}",
                method=method,
                url=url,
                original_error=e,
            )
            error.log_error(logger)
            raise error from e

        if not 200 <= response.status_code < 300:
            error = HTTPStatusException(
                status_code=response.status_code,
                body=response.text or None,
                method=method,
                url=url,
            )
            error.log_error(logger)
            raise error

        logger.debug(
            f"{method} {url} -> {response.status_code}",
            extra={"status_code": response.status_code},
        )
        return response

    def _decode(
        self, response: requests.Response, schema: Any, method: str, url: str
    ) -> Any:
        """
        Decode a JSON response body into ``schema``.

        Raises:
            DecodeException: If the body is not JSON or does not fit the schema
        """
        name = _schema_name(schema)
        try:
            data = response.json()
        except ValueError as e:
            error = DecodeException(
                f"Response to {method} {url} is not valid JSON: {e}",
                schema_name=name,
                method=method,
                url=url,
                original_error=e,
            )
            error.log_error(logger)
            raise error from e

        try:
            return _adapter(schema).validate_python(data, context=API_CONTEXT)
        except ValidationError as e:
            errors = e.errors()
            raw_dates = [
                err["ctx"]["error"].raw_value
                for err in errors
                if isinstance(err.get("ctx", {}).get("error"), DateParseException)
            ]
            if raw_dates:
                message = f"Cannot decode date: {raw_dates[0]}"
            else:
                first = errors[0] if errors else {}
                location = ".".join(str(loc) for loc in first.get("loc", ()))
                message = f"{location}: {first.get('msg', 'invalid payload')}"

            error = DecodeException(
                f"Failed to decode {name} from {method} {url}: {message}",
                schema_name=name,
                validation_errors=format_validation_errors(errors),
                method=method,
                url=url,
                original_error=e,
            )
            if raw_dates:
                error.details["raw_values"] = raw_dates
            error.log_error(logger)
            raise error from e

    def _get(self, schema: Type[T], *path: Any) -> T:
        url = self.build_url(*path)
        response = self._request("GET", url)
        return self._decode(response, schema, "GET", url)

    def _post(self, schema: Type[T], body: RequestModel, *path: Any) -> T:
        url = self.build_url(*path)
        response = self._request("POST", url, body)
        return self._decode(response, schema, "POST", url)

    def _patch(self, schema: Type[T], body: RequestModel, *path: Any) -> T:
        url = self.build_url(*path)
        response = self._request("PATCH", url, body)
        return self._decode(response, schema, "PATCH", url)

    def _delete(self, *path: Any) -> None:
        self._request("DELETE", self.build_url(*path))

    # Pets

    def fetch_pet(self, pet_id: int) -> Pet:
        """GET /pets/{id}"""
        return self._get(Pet, "pets", pet_id)

    def fetch_pets(self, user_id: int) -> List[Pet]:
        """GET /users/{user_id}/pets"""
        return self._get(List[Pet], "users", user_id, "pets")

    def create_pet(self, request: PetCreate, user_id: Optional[int] = None) -> Pet:
        """POST /users/{user_id}/pets when a user is given, else POST /pets."""
        if user_id is not None:
            return self._post(Pet, request, "users", user_id, "pets")
        return self._post(Pet, request, "pets")

    def update_pet(self, pet_id: int, request: PetUpdate) -> Pet:
        """PATCH /pets/{id}"""
        return self._patch(Pet, request, "pets", pet_id)

    def delete_pet(self, pet_id: int) -> None:
        """DELETE /pets/{id}"""
        self._delete("pets", pet_id)

    # Appointments

    def fetch_appointments(self, pet_id: int) -> List[Appointment]:
        """GET /pets/{pet_id}/appointments"""
        return self._get(List[Appointment], "pets", pet_id, "appointments")

    def create_appointment(
        self, pet_id: int, request: AppointmentCreate
    ) -> Appointment:
        """POST /pets/{pet_id}/appointments"""
        return self._post(Appointment, request, "pets", pet_id, "appointments")

    def update_appointment(
        self, appointment_id: int, request: AppointmentUpdate
    ) -> Appointment:
        """PATCH /appointments/{id}"""
        return self._patch(Appointment, request, "appointments", appointment_id)

    def delete_appointment(self, appointment_id: int) -> None:
        """DELETE /appointments/{id}"""
        self._delete("appointments", appointment_id)

    # Vaccines

    def fetch_vaccines(self, pet_id: int) -> List[Vaccine]:
        """GET /pets/{pet_id}/vaccines"""
        return self._get(List[Vaccine], "pets", pet_id, "vaccines")

    def create_vaccine(self, pet_id: int, request: VaccineCreate) -> Vaccine:
        """POST /pets/{pet_id}/vaccines"""
        return self._post(Vaccine, request, "pets", pet_id, "vaccines")

    def update_vaccine(self, vaccine_id: int, request: VaccineUpdate) -> Vaccine:
        """PATCH /vaccines/{id}"""
        return self._patch(Vaccine, request, "vaccines", vaccine_id)

    def delete_vaccine(self, vaccine_id: int) -> None:
        """DELETE /vaccines/{id}"""
        self._delete("vaccines", vaccine_id)

    # Tablets

    def fetch_tablets(self, pet_id: int) -> List[Tablet]:
        """GET /pets/{pet_id}/tablets"""
        return self._get(List[Tablet], "pets", pet_id, "tablets")

    def create_tablet(self, pet_id: int, request: TabletCreate) -> Tablet:
        """POST /pets/{pet_id}/tablets"""
        return self._post(Tablet, request, "pets", pet_id, "tablets")

    def update_tablet(self, tablet_id: int, request: TabletUpdate) -> Tablet:
        """PATCH /tablets/{id}"""
        return self._patch(Tablet, request, "tablets", tablet_id)

    def delete_tablet(self, tablet_id: int) -> None:
        """DELETE /tablets/{id}"""
        self._delete("tablets", tablet_id)

    # Weights

    def fetch_weights(self, pet_id: int) -> List[Weight]:
        """GET /pets/{pet_id}/weights"""
        return self._get(List[Weight], "pets", pet_id, "weights")

    def create_weight(self, pet_id: int, request: WeightCreate) -> Weight:
        """POST /pets/{pet_id}/weights"""
        return self._post(Weight, request, "pets", pet_id, "weights")

    def update_weight(self, weight_id: int, request: WeightUpdate) -> Weight:
        """PATCH /weights/{id}"""
        return self._patch(Weight, request, "weights", weight_id)

    def delete_weight(self, weight_id: int) -> None:
        """DELETE /weights/{id}"""
        self._delete("weights", weight_id)

    # Records

    def fetch_user_records(self, user_id: int) -> RecordsResponse:
        """GET /users/{user_id}/records"""
        return self._get(RecordsResponse, "users", user_id, "records")

    def fetch_pet_records(self, pet_id: int) -> RecordsResponse:
        """GET /pets/{pet_id}/records"""
        return self._get(RecordsResponse, "pets", pet_id, "records")
