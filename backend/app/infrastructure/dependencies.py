"""Dependency wiring — builds the object graph and exposes it to FastAPI."""

from fastapi import Request

from app.config import Settings
from app.application.services import PetService
from app.infrastructure.memory import InMemoryPetRepository
from app.infrastructure.security import AESFieldCipher


def build_pet_service(settings: Settings) -> PetService:
    """Wire cipher → in-memory repository → service.

    Called once per application instance; the returned service owns the
    only reference to its store.
    """
    cipher = AESFieldCipher(settings.encryption_key)
    repository = InMemoryPetRepository(cipher)
    return PetService(repository)


def get_pet_service(request: Request) -> PetService:
    """Provides the PetService attached to the running application."""
    return request.app.state.pet_service


def get_app_settings(request: Request) -> Settings:
    """Provides the Settings the running application was built with."""
    return request.app.state.settings
