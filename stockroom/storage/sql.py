"""
SQLAlchemy implementations of the repository interfaces.

Each repository wraps a request-scoped Session and commits per operation.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockroom.core.errors import DuplicateUsernameError, NotFoundError
from stockroom.storage.base import CrudRepository, ListQuery, StoredUser, UserRepository
from stockroom.storage.models import Base, Product, Provider, User

logger = logging.getLogger(__name__)


# =============================================================================
# Users
# =============================================================================


class SqlUserRepository(UserRepository):
    """Users table access for the credential service."""

    def __init__(self, session: Session):
        self.session = session

    def find_by_username(self, username: str) -> StoredUser | None:
        user = self.session.scalars(select(User).where(User.username == username)).first()
        return _to_stored_user(user) if user else None

    def create(self, username: str, password_hash: str) -> StoredUser:
        user = User(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateUsernameError(username)
        logger.info(f"Created user: {username}")
        return _to_stored_user(user)


def _to_stored_user(user: User) -> StoredUser:
    return StoredUser(id=user.id, username=user.username, password_hash=user.password_hash)


# =============================================================================
# Providers / Products
# =============================================================================


class _SqlCrudRepository(CrudRepository):
    """Shared list/get/delete over a single mapped model."""

    model: type[Base]
    entity: str

    def __init__(self, session: Session):
        self.session = session

    def list(self, query: ListQuery) -> list[Any]:
        stmt = select(self.model)
        if query.filter_field:
            stmt = stmt.where(getattr(self.model, query.filter_field) == query.filter_value)
        column = getattr(self.model, query.order_by)
        stmt = stmt.order_by(column.desc() if query.descending else column.asc())
        stmt = stmt.offset(query.offset).limit(query.page_size)
        return list(self.session.scalars(stmt))

    def get(self, id: str) -> Any | None:
        return self.session.get(self.model, id)

    def create(self, data: dict[str, Any]) -> Any:
        obj = self.model(**data)
        self.session.add(obj)
        self.session.commit()
        logger.info(f"Created {self.entity.lower()}: {obj.id}")
        return obj

    def update(self, id: str, data: dict[str, Any]) -> Any:
        obj = self._require(id)
        for key, value in data.items():
            setattr(obj, key, value)
        self.session.commit()
        return obj

    def delete(self, id: str) -> Any:
        obj = self._require(id)
        self.session.delete(obj)
        self.session.commit()
        logger.info(f"Deleted {self.entity.lower()}: {id}")
        return obj

    def _require(self, id: str) -> Any:
        obj = self.get(id)
        if obj is None:
            raise NotFoundError(self.entity, id)
        return obj


class SqlProviderRepository(_SqlCrudRepository):
    model = Provider
    entity = "Provider"


class SqlProductRepository(_SqlCrudRepository):
    """Products must point at an existing provider."""

    model = Product
    entity = "Product"

    def create(self, data: dict[str, Any]) -> Product:
        self._require_provider(data["provider_id"])
        return super().create(data)

    def update(self, id: str, data: dict[str, Any]) -> Product:
        self._require(id)
        if "provider_id" in data:
            self._require_provider(data["provider_id"])
        return super().update(id, data)

    def _require_provider(self, provider_id: str) -> None:
        if self.session.get(Provider, provider_id) is None:
            raise NotFoundError("Provider", provider_id)
