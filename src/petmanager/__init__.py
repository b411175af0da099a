"""
Pet Manager Client

A Python client for the pet-management REST API, covering an owner's pets
and their appointments, vaccines, medications and weight history.

It includes:

- Pydantic schemas mirroring the API's wire format, with tolerant date decoding
- A synchronous data-access client built on requests with typed errors
- Status classification for vaccines, appointments and tablets
- Weight trend summaries over fixed periods
- Observable state stores that mirror server collections in memory
- Configuration from environment variables or YAML files

Quick Start:
    >>> from petmanager import ClientConfig, PetManagerClient, PetStore
    >>> from petmanager.stores import VaccineStore

    >>> config = ClientConfig(base_url="http://localhost:8000", user_id=1)
    >>> with PetManagerClient(config) as client:
    ...     pets = PetStore(client)
    ...     pets.load_pets()
    ...     vaccines = VaccineStore(client, pet_id=pets.selected_pet.id)
    ...     vaccines.load()
    ...     for vaccine in vaccines.sorted_vaccines():
    ...         print(vaccine.name, vaccine.status.label)

Requirements:
    - Python 3.11+
    - Pydantic 2.5+
    - requests 2.31+
"""

__version__ = "0.1.0"
__author__ = "Pet Manager Team"
__license__ = "MIT"

from . import client
from . import exceptions
from . import schemas
from . import status
from . import stores
from . import utils

# Convenience imports for common usage patterns
from .client import PetManagerClient
from .exceptions import (
    DecodeException,
    HTTPStatusException,
    PetManagerException,
    TransportException,
)
from .schemas import Appointment, Pet, Tablet, Vaccine, Weight
from .stores import PetStore
from .utils import ClientConfig

__all__ = [
    # Version and metadata
    "__version__",
    "__author__",
    "__license__",
    # Core modules
    "client",
    "exceptions",
    "schemas",
    "status",
    "stores",
    "utils",
    # Convenience imports
    "PetManagerClient",
    "ClientConfig",
    "PetStore",
    "PetManagerException",
    "TransportException",
    "HTTPStatusException",
    "DecodeException",
    "Pet",
    "Appointment",
    "Vaccine",
    "Tablet",
    "Weight",
]
