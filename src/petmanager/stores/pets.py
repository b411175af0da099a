"""
Pet store.

Holds the owner's pets and the currently selected pet. Selection always
points at a pet in the list, or is None when the list is empty.
"""

import logging
from typing import Any, List, Optional

from ..client import PetManagerClient
from ..schemas import Pet, PetCreate, PetUpdate
from .base import ObservableStore

logger = logging.getLogger(__name__)


class PetStore(ObservableStore):
    """The user's pets and the current selection."""

    def __init__(self, client: PetManagerClient, user_id: Optional[int] = None):
        super().__init__(client)
        self.user_id = user_id if user_id is not None else client.config.user_id
        self.pets: List[Pet] = []
        self.selected_pet: Optional[Pet] = None

    def get(self, pet_id: int) -> Optional[Pet]:
        return next((p for p in self.pets if p.id == pet_id), None)

    def select_pet(self, pet: Optional[Pet]) -> None:
        self._publish("selected_pet", pet)

    def load_pet(self, pet_id: int) -> Optional[Pet]:
        """Fetch one pet, add it to the list and select it."""
        pet = self._attempt("load_pet", lambda: self.client.fetch_pet(pet_id))
        if pet is None:
            return None

        if self.get(pet.id) is None:
            self._publish("pets", [*self.pets, pet])
        else:
            self._publish("pets", [pet if p.id == pet.id else p for p in self.pets])
        self.select_pet(pet)
        return pet

    def load_pets(self, user_id: Optional[int] = None) -> bool:
        """
        Replace the list with the user's pets.

        Selects the first pet when nothing is selected yet or the selected pet
        is gone from the new list. A response that arrives after a newer load
        started is discarded.
        """
        user_id = user_id if user_id is not None else self.user_id
        if user_id is None:
            raise ValueError("No user id given and none configured")

        token = self._begin_load()
        try:
            pets = self._attempt("load_pets", lambda: self.client.fetch_pets(user_id))
        finally:
            self._finish_load(token)

        if pets is None:
            return False
        if not self._is_current(token):
            logger.debug(f"Discarding stale pet list for user {user_id}")
            return False

        self._publish("pets", list(pets))
        current = self.get(self.selected_pet.id) if self.selected_pet else None
        self.select_pet(current or (self.pets[0] if self.pets else None))
        return True

    def add_pet(
        self,
        name: str,
        breed: str,
        age: int,
        weight: float,
        gender: str,
        description: str = "",
        color: Optional[str] = None,
        **extra: Any,
    ) -> Optional[Pet]:
        """Create a pet (under the store's user when set), append and select it."""
        request = PetCreate(
            name=name,
            breed=breed,
            age=age,
            description=description,
            weight=weight,
            gender=gender,
            color=color,
            **extra,
        )
        pet = self._attempt(
            "add_pet", lambda: self.client.create_pet(request, user_id=self.user_id)
        )
        if pet is None:
            return None

        self._publish("pets", [*self.pets, pet])
        self.select_pet(pet)
        return pet

    def update_pet(self, pet: Pet, **changes: Any) -> Optional[Pet]:
        """
        Patch a pet with the given field changes.

        The local avatar reference survives the round trip since the server
        never returns it.
        """
        request = PetUpdate(**changes)
        updated = self._attempt(
            "update_pet", lambda: self.client.update_pet(pet.id, request)
        )
        if updated is None:
            return None

        updated = updated.model_copy(update={"image_name": pet.image_name})
        self._publish(
            "pets", [updated if p.id == pet.id else p for p in self.pets]
        )
        if self.selected_pet is not None and self.selected_pet.id == pet.id:
            self.select_pet(updated)
        return updated

    def delete_pet(self, pet: Pet) -> bool:
        """
        Delete a pet and drop it from the list.

        If it was selected, selection falls back to the new first pet, or
        None when the list is empty.
        """
        done = self._attempt("delete_pet", lambda: self.client.delete_pet(pet.id) or True)
        if not done:
            return False

        self._publish("pets", [p for p in self.pets if p.id != pet.id])
        if self.selected_pet is not None and self.selected_pet.id == pet.id:
            self.select_pet(self.pets[0] if self.pets else None)
        return True

    def set_image_name(self, pet: Pet, image_name: str) -> Pet:
        """Change a pet's local avatar reference; nothing is sent to the server."""
        updated = pet.model_copy(update={"image_name": image_name})
        self._publish("pets", [updated if p.id == pet.id else p for p in self.pets])
        if self.selected_pet is not None and self.selected_pet.id == pet.id:
            self.select_pet(updated)
        return updated
