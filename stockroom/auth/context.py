"""
Auth context - who is making the current request.

This is the lightweight object the access guard attaches to
`request.state.identity` and hands to protected route handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """
    Decoded claim set of a verified bearer token.

    Lives for exactly one request.

    Usage in routes:
        async def my_route(identity: AuthenticatedIdentity = Depends(require_auth)):
            print(f"User {identity.username} ({identity.id})")
    """

    id: str | int
    username: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> AuthenticatedIdentity:
        """
        Build an identity from a decoded token payload.

        Raises KeyError/TypeError/ValueError on missing or mistyped claims.
        """
        user_id = claims["id"]
        username = claims["username"]
        if isinstance(user_id, bool) or not isinstance(user_id, (str, int)):
            raise TypeError("id claim must be a string or an integer")
        if not isinstance(username, str):
            raise TypeError("username claim must be a string")
        return cls(
            id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username}
