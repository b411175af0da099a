"""
Pydantic schemas for the pet-management API.

This module contains the response models and the create/update request
payloads for every entity, along with the shared wire date types.
"""

from .appointment import (
    Appointment,
    AppointmentBase,
    AppointmentCreate,
    AppointmentStatus,
    AppointmentUpdate,
)
from .base import (
    API_CONTEXT,
    APIModel,
    ApiDate,
    ApiDateTime,
    RequestModel,
    UpdateRequestModel,
)
from .pet import DEFAULT_IMAGE_NAME, Pet, PetCreate, PetUpdate
from .record import AppointmentRecord, RecordsResponse, TabletRecord, VaccineRecord
from .tablet import Tablet, TabletBase, TabletCreate, TabletUpdate
from .vaccine import Vaccine, VaccineBase, VaccineCreate, VaccineUpdate
from .weight import Weight, WeightCreate, WeightUpdate

__all__ = [
    # Base types
    "API_CONTEXT",
    "APIModel",
    "ApiDate",
    "ApiDateTime",
    "RequestModel",
    "UpdateRequestModel",
    # Pet schemas
    "DEFAULT_IMAGE_NAME",
    "Pet",
    "PetCreate",
    "PetUpdate",
    # Appointment schemas
    "Appointment",
    "AppointmentBase",
    "AppointmentCreate",
    "AppointmentStatus",
    "AppointmentUpdate",
    # Vaccine schemas
    "Vaccine",
    "VaccineBase",
    "VaccineCreate",
    "VaccineUpdate",
    # Tablet schemas
    "Tablet",
    "TabletBase",
    "TabletCreate",
    "TabletUpdate",
    # Weight schemas
    "Weight",
    "WeightCreate",
    "WeightUpdate",
    # Records
    "AppointmentRecord",
    "RecordsResponse",
    "TabletRecord",
    "VaccineRecord",
]
