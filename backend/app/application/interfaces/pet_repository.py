"""Abstract repository interface (port) for Pet persistence."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from app.domain.entities import Page, Pet


class PetRepository(ABC):
    """Port for pet persistence — implemented in the infrastructure layer.

    Implementations own the sensitive-field discipline: ``owner_name`` goes
    in and comes out as plaintext regardless of how it is held at rest.
    Not-found outcomes are signalled with ``None``/``False``, never raised.
    """

    @abstractmethod
    async def get_by_id(self, pet_id: str) -> Pet | None:
        """Retrieve a single pet by its UUID."""
        ...

    @abstractmethod
    async def find_all(self, page: int, limit: int) -> Page[Pet]:
        """Retrieve one page of pets, newest first."""
        ...

    @abstractmethod
    async def find_by_search(self, term: str, page: int, limit: int) -> Page[Pet]:
        """Retrieve one page of pets matching ``term`` in any text field."""
        ...

    @abstractmethod
    async def create(self, pet: Pet) -> Pet:
        """Persist a new pet; the repository assigns id and timestamps."""
        ...

    @abstractmethod
    async def update(self, pet_id: str, changes: Mapping[str, Any]) -> Pet | None:
        """Apply a partial update. Returns None if the pet does not exist."""
        ...

    @abstractmethod
    async def delete(self, pet_id: str) -> bool:
        """Delete a pet. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def exists(self, pet_id: str) -> bool:
        """Return whether a pet with this id is stored."""
        ...

    @abstractmethod
    async def exists_duplicate(self, candidate: Pet, exclude_id: str | None = None) -> bool:
        """Return whether another pet shares the candidate's identifying fields."""
        ...
