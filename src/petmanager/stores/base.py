"""
Observable state containers.

Stores hold in-memory collections mirroring server state. They change
only after the server confirms an operation, and notify subscribers after
every published attribute change. A failed operation leaves the
collections untouched and records ``error_message`` instead.
"""

import logging
from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    TypeVar,
)

from ..client import PetManagerClient
from ..exceptions import PetManagerException
from ..schemas import RequestModel, UpdateRequestModel

logger = logging.getLogger(__name__)

T = TypeVar("T")
Subscriber = Callable[["ObservableStore", str], None]


class ObservableStore:
    """Base class providing subscriptions, load sequencing and error capture."""

    def __init__(self, client: PetManagerClient):
        self.client = client
        self.is_loading = False
        self.error_message: Optional[str] = None
        self._subscribers: List[Subscriber] = []
        self._generation = 0

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked as ``callback(store, attribute_name)``.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, name: str, value: Any) -> None:
        setattr(self, name, value)
        for callback in list(self._subscribers):
            callback(self, name)

    def _begin_load(self) -> int:
        """Start a collection load and return its generation token."""
        self._generation += 1
        self._publish("is_loading", True)
        return self._generation

    def _is_current(self, token: int) -> bool:
        return token == self._generation

    def _finish_load(self, token: int) -> None:
        if self._is_current(token):
            self._publish("is_loading", False)

    def _attempt(self, operation: str, func: Callable[[], T]) -> Optional[T]:
        """
        Run a client call, capturing API failures as ``error_message``.

        Returns:
            The call's result, or None if it raised a PetManagerException
        """
        try:
            result = func()
        except PetManagerException as e:
            e.log_error(logger)
            logger.warning(f"{self.__class__.__name__}.{operation} failed")
            self._publish("error_message", e.message)
            return None
        if self.error_message is not None:
            self._publish("error_message", None)
        return result

    def clear_error(self) -> None:
        self._publish("error_message", None)


class CollectionStore(ObservableStore, ABC, Generic[T]):
    """
    Store for one pet's records of a single entity type.

    Subclasses bind the four client calls; the store handles local
    mirroring: append on create, replace by id on update, remove by id on
    delete, full replacement only on an explicit load.
    """

    def __init__(self, client: PetManagerClient, pet_id: Optional[int] = None):
        super().__init__(client)
        self.pet_id = pet_id
        self.items: List[T] = []

    @abstractmethod
    def _fetch(self, pet_id: int) -> List[T]:
        pass

    @abstractmethod
    def _create(self, pet_id: int, request: RequestModel) -> T:
        pass

    @abstractmethod
    def _update(self, item_id: int, request: UpdateRequestModel) -> T:
        pass

    @abstractmethod
    def _remove(self, item_id: int) -> None:
        pass

    def _resolve_pet_id(self, pet_id: Optional[int]) -> int:
        pet_id = pet_id if pet_id is not None else self.pet_id
        if pet_id is None:
            raise ValueError(f"{self.__class__.__name__} has no pet selected")
        return pet_id

    def get(self, item_id: int) -> Optional[T]:
        return next((item for item in self.items if item.id == item_id), None)

    def load(self, pet_id: Optional[int] = None) -> bool:
        """
        Replace the collection with the server's list for a pet.

        A response that arrives after a newer load started is discarded.

        Returns:
            True if the collection was replaced
        """
        pet_id = self._resolve_pet_id(pet_id)
        self.pet_id = pet_id
        token = self._begin_load()
        try:
            items = self._attempt("load", lambda: self._fetch(pet_id))
        finally:
            self._finish_load(token)

        if items is None:
            return False
        if not self._is_current(token):
            logger.debug(
                f"Discarding stale {self.__class__.__name__} load for pet {pet_id}"
            )
            return False

        self._publish("items", list(items))
        return True

    def add(self, request: RequestModel, pet_id: Optional[int] = None) -> Optional[T]:
        """Create an item on the server and append it locally."""
        pet_id = self._resolve_pet_id(pet_id)
        created = self._attempt("add", lambda: self._create(pet_id, request))
        if created is not None:
            self._publish("items", [*self.items, created])
        return created

    def update(self, item_id: int, request: UpdateRequestModel) -> Optional[T]:
        """Patch an item on the server and replace the local copy by id."""
        updated = self._attempt("update", lambda: self._update(item_id, request))
        if updated is not None:
            self._replace(updated)
        return updated

    def delete(self, item_id: int) -> bool:
        """Delete an item on the server and drop the local copy by id."""
        done = self._attempt("delete", lambda: self._remove(item_id) or True)
        if not done:
            return False
        self._publish("items", [item for item in self.items if item.id != item_id])
        return True

    def _replace(self, updated: T) -> None:
        items = [updated if item.id == updated.id else item for item in self.items]
        if not any(item.id == updated.id for item in self.items):
            items.append(updated)
        self._publish("items", items)

    def snapshot(self) -> Dict[str, Any]:
        """Plain view of the store state, for debugging and logging."""
        return {
            "pet_id": self.pet_id,
            "count": len(self.items),
            "is_loading": self.is_loading,
            "error_message": self.error_message,
        }
