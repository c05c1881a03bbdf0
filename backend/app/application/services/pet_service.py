"""Application service (use case) for Pet operations."""

import asyncio
import logging
from dataclasses import replace

from app.application.interfaces import PetRepository
from app.application.schemas.pet import PetCreate, PetUpdate
from app.domain.entities import Page, Pet
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ("name", "species", "breed", "owner_name")

SAMPLE_PETS: tuple[PetCreate, ...] = (
    PetCreate(name="Max", species="Perro", breed="Golden Retriever", age=3, owner_name="Juan García"),
    PetCreate(name="Luna", species="Gato", breed="Siamés", age=2, owner_name="María López"),
    PetCreate(name="Rocky", species="Perro", breed="Bulldog Francés", age=4, owner_name="Carlos Rodríguez"),
    PetCreate(name="Mía", species="Gato", breed="Persa", age=1, owner_name="Ana Martínez"),
    PetCreate(name="Coco", species="Ave", breed="Loro", age=5, owner_name="Pedro Sánchez"),
)


class PetService:
    """Orchestrates pet business logic. Depends on the repository port (DI).

    Duplicate-check-then-write sequences are serialised by a single lock so
    two concurrent requests cannot both register the same pet.
    """

    def __init__(self, repository: PetRepository):
        self._repository = repository
        self._write_lock = asyncio.Lock()

    async def get_pet(self, pet_id: str) -> Pet:
        pet = await self._repository.get_by_id(pet_id)
        if pet is None:
            raise EntityNotFoundError("Pet", pet_id)
        return pet

    async def list_pets(self, page: int = 1, limit: int = 6, search: str | None = None) -> Page[Pet]:
        if search and search.strip():
            return await self._repository.find_by_search(search.strip(), page, limit)
        return await self._repository.find_all(page, limit)

    async def create_pet(self, data: PetCreate) -> Pet:
        pet = Pet(
            name=data.name,
            species=data.species,
            breed=data.breed,
            age=data.age,
            owner_name=data.owner_name,
        )
        async with self._write_lock:
            if await self._repository.exists_duplicate(pet):
                raise DuplicateEntityError("Pet", IDENTITY_FIELDS)
            created = await self._repository.create(pet)
        logger.info("Registered pet %s", created.id)
        return created

    async def update_pet(self, pet_id: str, data: PetUpdate) -> Pet:
        changes = data.changes()
        async with self._write_lock:
            current = await self.get_pet(pet_id)

            # Compare the effective values after the change is applied
            merged = replace(current, **changes)
            if await self._repository.exists_duplicate(merged, exclude_id=pet_id):
                raise DuplicateEntityError("Pet", IDENTITY_FIELDS)

            updated = await self._repository.update(pet_id, changes)
        if updated is None:
            raise EntityNotFoundError("Pet", pet_id)
        logger.info("Updated pet %s", pet_id)
        return updated

    async def delete_pet(self, pet_id: str) -> None:
        deleted = await self._repository.delete(pet_id)
        if not deleted:
            raise EntityNotFoundError("Pet", pet_id)
        logger.info("Deleted pet %s", pet_id)

    async def seed_sample_data(self) -> int:
        """Insert the built-in sample pets, skipping any already present."""
        inserted = 0
        for sample in SAMPLE_PETS:
            try:
                await self.create_pet(sample)
            except DuplicateEntityError:
                logger.debug("Sample pet '%s' already registered", sample.name)
                continue
            inserted += 1
        logger.info("Seeded %d sample pet(s)", inserted)
        return inserted
