from .field_cipher import FieldCipher
from .pet_repository import PetRepository

__all__ = [
    "FieldCipher",
    "PetRepository",
]
