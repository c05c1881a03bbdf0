from .pet_service import PetService

__all__ = [
    "PetService",
]
