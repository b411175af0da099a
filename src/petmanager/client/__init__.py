"""
Data-access client for the pet-management REST API.
"""

from .api_client import JSON_HEADERS, PetManagerClient

__all__ = [
    "JSON_HEADERS",
    "PetManagerClient",
]
