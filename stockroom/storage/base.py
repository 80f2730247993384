"""
Storage abstraction layer.

All persistence goes through these interfaces. The auth core only ever
sees `UserRepository`; the CRUD routes use the provider and product
repositories. Implementations live in `stockroom.storage.sql`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class StoredUser:
    """Persisted principal. The hash is never the plaintext password."""

    id: str
    username: str
    password_hash: str


@dataclass(frozen=True)
class ListQuery:
    """
    Validated pagination/sort/filter options.

    Field names here are model attribute names that already passed an
    entity's allow-list (see `EntityFields`).
    """

    page: int = 1
    page_size: int = 5
    order_by: str = "created_at"
    descending: bool = False
    filter_field: str | None = None
    filter_value: Any = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class EntityFields:
    """
    Allow-lists mapping wire (camelCase) field names to model attributes.

    Nothing outside these maps ever reaches the query builder.
    """

    sortable: dict[str, str]
    filterable: dict[str, str]


PRODUCT_FIELDS = EntityFields(
    sortable={
        "id": "id",
        "name": "name",
        "description": "description",
        "price": "price",
        "providerId": "provider_id",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    },
    filterable={
        "id": "id",
        "name": "name",
        "description": "description",
        "price": "price",
        "providerId": "provider_id",
    },
)

PROVIDER_FIELDS = EntityFields(
    sortable={
        "id": "id",
        "name": "name",
        "description": "description",
        "phone": "phone",
        "address": "address",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    },
    filterable={
        "id": "id",
        "name": "name",
        "description": "description",
        "phone": "phone",
        "address": "address",
    },
)


# =============================================================================
# Repository Interfaces
# =============================================================================


class UserRepository(ABC):
    """Narrow capability interface the credential service depends on."""

    @abstractmethod
    def find_by_username(self, username: str) -> StoredUser | None:
        """Look up a user; None when absent."""
        pass

    @abstractmethod
    def create(self, username: str, password_hash: str) -> StoredUser:
        """Persist a user. Raises DuplicateUsernameError if the name is taken."""
        pass


class CrudRepository(ABC, Generic[T]):
    """Basic CRUD over one entity type."""

    @abstractmethod
    def list(self, query: ListQuery) -> list[T]:
        """One page of entities, sorted and filtered."""
        pass

    @abstractmethod
    def get(self, id: str) -> T | None:
        """Get an entity by ID."""
        pass

    @abstractmethod
    def create(self, data: dict[str, Any]) -> T:
        """Create an entity."""
        pass

    @abstractmethod
    def update(self, id: str, data: dict[str, Any]) -> T:
        """Replace an entity's fields. Raises NotFoundError if absent."""
        pass

    @abstractmethod
    def delete(self, id: str) -> T:
        """Delete an entity and return it. Raises NotFoundError if absent."""
        pass
