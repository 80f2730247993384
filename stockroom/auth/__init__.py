"""
Authentication & authorization.

1. Passwords are bcrypt-hashed once at signup
2. Tokens are HS256 JWTs carrying {id, username, iat, exp}
3. The access guard admits or rejects every protected request
"""

from stockroom.auth.context import AuthenticatedIdentity
from stockroom.auth.jwt import (
    AuthConfig,
    TokenIssuer,
    RejectReason,
    VerificationResult,
    decode_token,
)
from stockroom.auth.passwords import hash_password, verify_password
from stockroom.auth.guard import AccessGuard, require_auth
from stockroom.auth.service import CredentialService

__all__ = [
    # Main interface
    "AccessGuard",
    "require_auth",
    "CredentialService",
    "AuthenticatedIdentity",
    # Tokens
    "AuthConfig",
    "TokenIssuer",
    "RejectReason",
    "VerificationResult",
    "decode_token",
    # Passwords
    "hash_password",
    "verify_password",
]
