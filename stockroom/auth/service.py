"""
Credential service - signup and login flows.

Composes the password hasher, the token issuer and a user repository.
Route handlers call it; it never touches the HTTP response.
"""

from __future__ import annotations

import logging
import secrets
from functools import lru_cache

from stockroom.auth.jwt import TokenIssuer
from stockroom.auth.passwords import hash_password, verify_password
from stockroom.core.errors import InvalidCredentialsError
from stockroom.storage.base import UserRepository

logger = logging.getLogger(__name__)


@lru_cache
def _timing_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


class CredentialService:
    """Turns usernames and passwords into bearer tokens."""

    def __init__(self, users: UserRepository, issuer: TokenIssuer):
        self.users = users
        self.issuer = issuer

    def sign_up(self, username: str, password: str) -> str:
        """
        Create an account and return a token for it.

        Raises DuplicateUsernameError if the username is taken.
        """
        user = self.users.create(username, hash_password(password))
        return self.issuer.issue(user.id, user.username)

    def log_in(self, username: str, password: str) -> str:
        """
        Authenticate and return a fresh token.

        Unknown usernames and wrong passwords raise the same
        InvalidCredentialsError so usernames cannot be enumerated.
        """
        user = self.users.find_by_username(username)
        # Unknown users still pay for one bcrypt check
        password_hash = user.password_hash if user else _timing_hash()
        if not verify_password(password, password_hash) or user is None:
            logger.info(f"Failed login for username: {username}")
            raise InvalidCredentialsError()

        return self.issuer.issue(user.id, user.username)
