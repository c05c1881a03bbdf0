"""In-memory storage adapters."""

from .pet_repository import InMemoryPetRepository

__all__ = ["InMemoryPetRepository"]
