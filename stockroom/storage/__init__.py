"""
Storage abstractions.

- UserRepository     → users table (credential service)
- CrudRepository     → providers / products tables (CRUD routes)
"""

from stockroom.storage.base import (
    StoredUser,
    ListQuery,
    EntityFields,
    PRODUCT_FIELDS,
    PROVIDER_FIELDS,
    UserRepository,
    CrudRepository,
)
from stockroom.storage.session import (
    create_db_engine,
    create_session_factory,
    init_db,
    get_db,
)
from stockroom.storage.sql import (
    SqlUserRepository,
    SqlProviderRepository,
    SqlProductRepository,
)

__all__ = [
    "StoredUser",
    "ListQuery",
    "EntityFields",
    "PRODUCT_FIELDS",
    "PROVIDER_FIELDS",
    "UserRepository",
    "CrudRepository",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "get_db",
    "SqlUserRepository",
    "SqlProviderRepository",
    "SqlProductRepository",
]
