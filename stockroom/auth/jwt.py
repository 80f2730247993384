# =============================================================================
# JWT Token Issuance and Verification
# =============================================================================
#
# This module provides:
#   - AuthConfig: immutable signing configuration (secret, algorithm, ttl)
#   - TokenIssuer: signs {id, username, iat, exp} claim sets
#   - decode_token: verifies signature + expiry, returning a result value
#
# Tokens are stateless: nothing is persisted, verification depends only on
# the shared secret and the clock.
#
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
import logging

import jwt

from stockroom.auth.context import AuthenticatedIdentity
from stockroom.core.errors import ConfigurationError
from stockroom.core.utils import utc_now

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=24)
REQUIRED_CLAIMS = ["id", "username", "iat", "exp"]


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class AuthConfig:
    """
    Signing configuration, loaded once at process start.

    Raises ConfigurationError if the secret is empty so a misconfigured
    process fails at startup instead of issuing unsigned tokens.
    """

    secret: str
    algorithm: str = "HS256"
    token_ttl: timedelta = DEFAULT_TOKEN_TTL

    def __post_init__(self):
        if not self.secret or not self.secret.strip():
            raise ConfigurationError("JWT_SECRET is not set")
        if not self.algorithm.startswith("HS"):
            raise ConfigurationError(f"Unsupported signing algorithm: {self.algorithm}")
        if self.token_ttl <= timedelta(0):
            raise ConfigurationError("Token lifetime must be positive")

    def __repr__(self) -> str:
        return f"AuthConfig(algorithm={self.algorithm!r}, token_ttl={self.token_ttl!r})"


# =============================================================================
# Token Creation
# =============================================================================


class TokenIssuer:
    """Creates signed, time-limited bearer tokens."""

    def __init__(self, config: AuthConfig):
        self.config = config

    def issue(self, user_id: str | int, username: str, now: datetime | None = None) -> str:
        """
        Create a token for a user.

        Args:
            user_id: Stored user ID (opaque string or integer)
            username: Stored username
            now: Issue instant; defaults to the current UTC time

        Returns:
            Compact JWS string (header.payload.signature)
        """
        issued_at = now or utc_now()
        payload = {
            "id": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.config.token_ttl,
        }
        token = jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)
        logger.debug(f"Issued token for user: {username}")
        return token


# =============================================================================
# Token Validation
# =============================================================================


class RejectReason(str, Enum):
    """Why a request was refused. Logged, never shown to the client."""

    MISSING_HEADER = "missing_header"
    MALFORMED_HEADER = "malformed_header"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    MALFORMED_TOKEN = "malformed_token"


@dataclass(frozen=True)
class VerificationResult:
    """Either an admitted identity or the reason for rejection."""

    identity: AuthenticatedIdentity | None = None
    reason: RejectReason | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.identity is not None

    @classmethod
    def admit(cls, identity: AuthenticatedIdentity) -> VerificationResult:
        return cls(identity=identity)

    @classmethod
    def reject(cls, reason: RejectReason, detail: str | None = None) -> VerificationResult:
        return cls(reason=reason, detail=detail)


def decode_token(token: str, config: AuthConfig) -> VerificationResult:
    """
    Verify a token's signature and expiry.

    Never raises: every failure becomes a rejected result.
    """
    try:
        claims = jwt.decode(
            token,
            config.secret,
            algorithms=[config.algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        return VerificationResult.reject(RejectReason.EXPIRED, "Token has expired")
    except jwt.InvalidSignatureError:
        return VerificationResult.reject(RejectReason.BAD_SIGNATURE, "Signature verification failed")
    except jwt.InvalidTokenError as e:
        return VerificationResult.reject(RejectReason.MALFORMED_TOKEN, f"Invalid token: {e}")

    try:
        identity = AuthenticatedIdentity.from_claims(claims)
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        return VerificationResult.reject(RejectReason.MALFORMED_TOKEN, f"Invalid claims: {e}")

    return VerificationResult.admit(identity)
