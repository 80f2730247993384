"""
Core building blocks shared by every layer: the error taxonomy and
small utilities.
"""

from stockroom.core.errors import (
    StockroomError,
    ConfigurationError,
    UnknownError,
    InputError,
    DuplicateUsernameError,
    NotFoundError,
    AuthError,
    NotAuthorizedError,
    CredentialsError,
    InvalidCredentialsError,
)
from stockroom.core.utils import generate_id, utc_now

__all__ = [
    # Errors
    "StockroomError",
    "ConfigurationError",
    "UnknownError",
    "InputError",
    "DuplicateUsernameError",
    "NotFoundError",
    "AuthError",
    "NotAuthorizedError",
    "CredentialsError",
    "InvalidCredentialsError",
    # Utils
    "generate_id",
    "utc_now",
]
