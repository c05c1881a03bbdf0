"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create or update into a duplicate entity.

    ``fields`` names the attributes that together identify the entity; the
    values are not included in the message since some may be sensitive.
    """

    def __init__(self, entity_type: str, fields: tuple[str, ...]):
        self.entity_type = entity_type
        self.fields = fields
        super().__init__(
            f"{entity_type} with the same {', '.join(fields)} already exists"
        )
