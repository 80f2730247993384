"""
Error taxonomy.

Services and repositories raise these; the application's exception
handlers map them to HTTP responses. Public messages are deliberately
generic: details stay in the logs.
"""

from __future__ import annotations


class StockroomError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    public_message: str = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class ConfigurationError(StockroomError):
    """Invalid process configuration. Raised at startup, never per request."""


class UnknownError(StockroomError):
    """Persistence or infrastructure failure."""


# =============================================================================
# Input
# =============================================================================


class InputError(StockroomError):
    """Request data the server refuses to act on."""

    status_code = 400
    public_message = "Invalid input"


class DuplicateUsernameError(InputError):
    """The store already holds a user with this username."""

    def __init__(self, username: str):
        super().__init__(f"Username already taken: {username}")
        self.username = username


class NotFoundError(StockroomError):
    """A referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: str | None = None):
        self.entity = entity
        self.entity_id = entity_id
        self.public_message = f"{entity} not found"
        super().__init__(f"{entity} not found: {entity_id}" if entity_id else None)


# =============================================================================
# Authentication
# =============================================================================


class AuthError(StockroomError):
    """Missing, invalid or expired bearer token."""

    status_code = 401
    public_message = "Not authorized"


class NotAuthorizedError(AuthError):
    """Raised by the access guard on every rejection path."""


class CredentialsError(StockroomError):
    """Login failure."""

    status_code = 401
    public_message = "Invalid credentials"


class InvalidCredentialsError(CredentialsError):
    """Unknown username or wrong password. The two are indistinguishable."""
