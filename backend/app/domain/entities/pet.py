"""Domain entity — pure Python business object for a registered pet."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Pet:
    """Core domain entity representing a pet and its owner.

    ``owner_name`` is the only sensitive attribute: the store keeps it
    encrypted, but every Pet handed out to callers carries the plaintext.
    """

    name: str
    species: str
    breed: str
    age: int
    owner_name: str
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        name: str | None = None,
        species: str | None = None,
        breed: str | None = None,
        age: int | None = None,
        owner_name: str | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        """Update mutable fields and refresh the updated_at timestamp."""
        if name is not None:
            self.name = name
        if species is not None:
            self.species = species
        if breed is not None:
            self.breed = breed
        if age is not None:
            self.age = age
        if owner_name is not None:
            self.owner_name = owner_name
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def identity_key(self) -> tuple[str, str, str, str]:
        """Case-folded business identity used for duplicate detection."""
        return (
            self.name.casefold(),
            self.species.casefold(),
            self.breed.casefold(),
            self.owner_name.casefold(),
        )
