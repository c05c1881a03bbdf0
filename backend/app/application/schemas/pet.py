"""Pydantic DTOs (Data Transfer Objects) for the Pet feature.

Wire format is camelCase (``ownerName``, ``createdAt``); Python code may use
either the field names or the aliases.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Letters (including Spanish accents, ñ and ü) and spaces only
TEXT_ONLY_PATTERN = r"^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s]+$"

MIN_AGE = 0
MAX_AGE = 100

_CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
)


class PetCreate(BaseModel):
    """Schema for registering a new pet."""

    model_config = _CAMEL_CONFIG

    name: str = Field(..., min_length=2, max_length=50, pattern=TEXT_ONLY_PATTERN, examples=["Max"])
    species: str = Field(..., min_length=2, pattern=TEXT_ONLY_PATTERN, examples=["Perro"])
    breed: str = Field(..., min_length=2, pattern=TEXT_ONLY_PATTERN, examples=["Golden Retriever"])
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE, examples=[3])
    owner_name: str = Field(..., min_length=2, pattern=TEXT_ONLY_PATTERN, examples=["Juan García"])


class PetUpdate(BaseModel):
    """Schema for updating an existing pet — all fields optional, at least one required."""

    model_config = _CAMEL_CONFIG

    name: str | None = Field(None, min_length=2, max_length=50, pattern=TEXT_ONLY_PATTERN)
    species: str | None = Field(None, min_length=2, pattern=TEXT_ONLY_PATTERN)
    breed: str | None = Field(None, min_length=2, pattern=TEXT_ONLY_PATTERN)
    age: int | None = Field(None, ge=MIN_AGE, le=MAX_AGE)
    owner_name: str | None = Field(None, min_length=2, pattern=TEXT_ONLY_PATTERN)

    @model_validator(mode="after")
    def _require_one_field(self) -> "PetUpdate":
        if not self.changes():
            raise ValueError("At least one field must be provided for update")
        return self

    def changes(self) -> dict[str, str | int]:
        """Supplied fields keyed by entity attribute name."""
        return self.model_dump(exclude_none=True)


class PetResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    name: str
    species: str
    breed: str
    age: int
    owner_name: str
    created_at: datetime
    updated_at: datetime


class ValidationErrorDetail(BaseModel):
    """A single field-level validation problem."""

    field: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every JSON response."""

    success: bool
    data: T | None = None
    message: str | None = None
    error: str | None = None
    details: list[ValidationErrorDetail] | None = None


class PaginationInfo(BaseModel):
    """Totals for a paginated listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for list endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    data: list[T]
    pagination: PaginationInfo
    message: str | None = None
