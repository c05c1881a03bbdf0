"""In-memory repository for Pet — encrypts owner names at rest.

Stored entities always hold the ciphertext form of ``owner_name``; every Pet
that leaves this module is an independent copy with the plaintext restored.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from app.application.interfaces import FieldCipher, PetRepository
from app.domain.entities import Page, Pet

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "species", "breed", "age", "owner_name"})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryPetRepository(PetRepository):
    """Implements the PetRepository port with a process-local dict.

    Operations never suspend, so each call runs to completion on the event
    loop without interleaving with other requests.
    """

    def __init__(
        self,
        cipher: FieldCipher,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ):
        self._cipher = cipher
        self._clock = clock
        self._id_factory = id_factory
        self._pets: dict[str, Pet] = {}
        # Insertion order, used as a tie-breaker for equal created_at values
        self._sequence: dict[str, int] = {}
        self._issued_ids: set[str] = set()
        self._next_sequence = 0

    # ── Mapping helpers ─────────────────────────────────────────────

    def _reveal(self, stored: Pet) -> Pet:
        """Stored entity → caller copy with owner_name decrypted."""
        return replace(stored, owner_name=self._cipher.decrypt(stored.owner_name))

    def _new_id(self) -> str:
        pet_id = self._id_factory()
        while pet_id in self._issued_ids:
            logger.warning("Generated pet id collided with an issued id; retrying")
            pet_id = self._id_factory()
        self._issued_ids.add(pet_id)
        return pet_id

    def _sorted_revealed(self) -> list[Pet]:
        """All pets decrypted, newest first."""
        ordered = sorted(
            self._pets.values(),
            key=lambda p: (p.created_at, self._sequence[p.id]),
            reverse=True,
        )
        return [self._reveal(p) for p in ordered]

    # ── Queries ─────────────────────────────────────────────────────

    async def get_by_id(self, pet_id: str) -> Pet | None:
        stored = self._pets.get(pet_id)
        return self._reveal(stored) if stored else None

    async def find_all(self, page: int, limit: int) -> Page[Pet]:
        return Page.slice(self._sorted_revealed(), page, limit)

    async def find_by_search(self, term: str, page: int, limit: int) -> Page[Pet]:
        needle = term.strip().casefold()
        matches = [
            pet
            for pet in self._sorted_revealed()
            if needle in pet.name.casefold()
            or needle in pet.species.casefold()
            or needle in pet.breed.casefold()
            or needle in pet.owner_name.casefold()
        ]
        return Page.slice(matches, page, limit)

    async def exists(self, pet_id: str) -> bool:
        return pet_id in self._pets

    async def exists_duplicate(self, candidate: Pet, exclude_id: str | None = None) -> bool:
        wanted = candidate.identity_key()
        for pet_id, stored in self._pets.items():
            if exclude_id is not None and pet_id == exclude_id:
                continue
            if self._reveal(stored).identity_key() == wanted:
                return True
        return False

    # ── Mutations ───────────────────────────────────────────────────

    async def create(self, pet: Pet) -> Pet:
        now = self._clock()
        stored = replace(
            pet,
            id=self._new_id(),
            owner_name=self._cipher.encrypt(pet.owner_name),
            created_at=now,
            updated_at=now,
        )
        self._pets[stored.id] = stored
        self._sequence[stored.id] = self._next_sequence
        self._next_sequence += 1
        logger.debug("Stored pet %s", stored.id)

        # The caller already holds the plaintext; no decrypt round-trip needed
        return replace(stored, owner_name=pet.owner_name)

    async def update(self, pet_id: str, changes: Mapping[str, Any]) -> Pet | None:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update unknown Pet fields: {sorted(unknown)}")

        current = self._pets.get(pet_id)
        if current is None:
            return None

        fields = dict(changes)
        owner_name = fields.pop("owner_name", None)
        if owner_name is not None:
            fields["owner_name"] = self._cipher.encrypt(owner_name)

        updated = replace(current)
        updated.update(**fields, updated_at=max(self._clock(), current.created_at))
        self._pets[pet_id] = updated
        logger.debug("Updated pet %s (fields=%s)", pet_id, sorted(changes))
        return self._reveal(updated)

    async def delete(self, pet_id: str) -> bool:
        if pet_id not in self._pets:
            return False
        del self._pets[pet_id]
        del self._sequence[pet_id]
        logger.debug("Deleted pet %s", pet_id)
        return True
