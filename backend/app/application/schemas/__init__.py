from .pet import (
    ApiResponse,
    PaginatedResponse,
    PaginationInfo,
    PetCreate,
    PetResponse,
    PetUpdate,
    ValidationErrorDetail,
)

__all__ = [
    "ApiResponse",
    "PaginatedResponse",
    "PaginationInfo",
    "PetCreate",
    "PetResponse",
    "PetUpdate",
    "ValidationErrorDetail",
]
