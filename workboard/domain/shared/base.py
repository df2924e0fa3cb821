"""Base classes for domain entities and value objects."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: Any) -> bool:
        """Value objects are equal if all their attributes are equal."""
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        """Value objects with same values have same hash."""
        return hash(tuple(sorted(self.model_dump().items())))


class Entity(BaseModel):
    """
    Base class for entities (have identity).

    Entities on the board are immutable snapshots: a change produces a new
    instance with the same ``id``. Published collections hand these instances
    straight to subscribers.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID, type and field values."""
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash(self.id)
