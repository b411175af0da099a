"""
Observable state stores mirroring the API's collections in memory.
"""

from .base import CollectionStore, ObservableStore
from .pets import PetStore
from .records import (
    AppointmentStore,
    RecordsStore,
    TabletStore,
    VaccineStore,
    WeightStore,
)

__all__ = [
    "ObservableStore",
    "CollectionStore",
    "PetStore",
    "AppointmentStore",
    "VaccineStore",
    "TabletStore",
    "WeightStore",
    "RecordsStore",
]
