"""
Pytest configuration and fixtures for petmanager tests.

This module provides a pinned reference clock, sample API payloads and a
mocked HTTP session so the client and stores can be exercised without a
running server.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest

from petmanager.client import PetManagerClient
from petmanager.utils.config import ClientConfig

BASE_URL = "http://api.test"

# Reference instant used by every date-sensitive test.
_FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _make_response(
    status_code: int = 200,
    json_data: Any = None,
    text: Optional[str] = None,
) -> Mock:
    """Build a mock ``requests.Response``."""
    response = Mock()
    response.status_code = status_code
    if json_data is not None:
        response.text = json.dumps(json_data)
        response.json.return_value = json_data
    else:
        response.text = text if text is not None else ""
        response.json.side_effect = ValueError("Expecting value")
    return response


def _days_from_now(days: float) -> datetime:
    return _FIXED_NOW + timedelta(days=days)


def _pet_payload(pet_id: int = 1, **overrides: Any) -> Dict[str, Any]:
    data = {
        "id": pet_id,
        "name": "Buddy",
        "species": "Golden Retriever",
        "age": 3,
        "description": "Friendly",
        "weight": 30.5,
        "gender": "male",
        "color": "golden",
    }
    data.update(overrides)
    return data


def _vaccine_payload(
    vaccine_id: int = 1,
    administered: str = "2026-01-05",
    up_to_date: Optional[bool] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    data = {
        "id": vaccine_id,
        "name": "Rabies",
        "administered_date": administered,
        "next_due_date": None,
        "administered_by": "Dr. Smith",
        "notes": None,
        "frequency": "Yearly",
        "up_to_date": up_to_date,
        "pet_id": 1,
    }
    data.update(overrides)
    return data


def _appointment_payload(
    appointment_id: int = 1,
    appointment_date: str = "2026-01-20T09:30:00.000000",
    **overrides: Any,
) -> Dict[str, Any]:
    data = {
        "id": appointment_id,
        "appointment_date": appointment_date,
        "reason": "Checkup",
        "vet_name": "Dr. Smith",
        "location": "Main Street Clinic",
        "notes": None,
        "status": "scheduled",
        "pet_id": 1,
    }
    data.update(overrides)
    return data


def _tablet_payload(
    tablet_id: int = 1,
    start_date: str = "2026-01-01",
    end_date: Optional[str] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    data = {
        "id": tablet_id,
        "name": "Carprofen",
        "dosage": "50mg",
        "frequency": "Twice daily",
        "start_date": start_date,
        "end_date": end_date,
        "notes": None,
        "pet_id": 1,
    }
    data.update(overrides)
    return data


def _weight_payload(
    weight_id: int = 1,
    weight: float = 30.0,
    recorded_at: str = "2026-01-10T08:00:00",
    **overrides: Any,
) -> Dict[str, Any]:
    data = {
        "id": weight_id,
        "weight": weight,
        "recorded_at": recorded_at,
        "notes": None,
        "pet_id": 1,
    }
    data.update(overrides)
    return data


@pytest.fixture
def fixed_now() -> datetime:
    """Pinned reference instant."""
    return _FIXED_NOW


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, timeout=5, user_id=7)


@pytest.fixture
def mock_session() -> Mock:
    """A stand-in for ``requests.Session``; set ``request`` per test."""
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def client(config: ClientConfig, mock_session: Mock) -> PetManagerClient:
    return PetManagerClient(config=config, session=mock_session)


@pytest.fixture
def respond(mock_session: Mock):
    """Queue responses returned by successive session requests."""

    def _respond(*responses: Mock) -> Mock:
        mock_session.request.side_effect = list(responses)
        return mock_session.request

    return _respond


@pytest.fixture
def sample_pets() -> List[Dict[str, Any]]:
    return [
        _pet_payload(1, name="Buddy"),
        _pet_payload(2, name="Whiskers", species="Siamese", gender="female"),
        _pet_payload(3, name="Rex", species="Beagle"),
    ]


@pytest.fixture
def days_from_now():
    """Build instants relative to the pinned clock."""
    return _days_from_now


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def make_response():
    """Factory for mock ``requests.Response`` objects."""
    return _make_response


@pytest.fixture
def pet_payload():
    return _pet_payload


@pytest.fixture
def vaccine_payload():
    return _vaccine_payload


@pytest.fixture
def appointment_payload():
    return _appointment_payload


@pytest.fixture
def tablet_payload():
    return _tablet_payload


@pytest.fixture
def weight_payload():
    return _weight_payload
