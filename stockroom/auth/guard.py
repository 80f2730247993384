"""
Access guard - the gate in front of every protected route.

Design:
- `AccessGuard.check()` runs the extract → parse → verify state machine
  over a raw Authorization header and returns a VerificationResult
- `require_auth` is the FastAPI dependency wrapping it: on ADMIT it
  attaches the identity to `request.state.identity`, on REJECT it raises
  NotAuthorizedError, which the app renders as a bare 401 "Not authorized"
- The client never learns why it was rejected; the reason is logged
"""

from __future__ import annotations

import logging

from fastapi import Request

from stockroom.auth.context import AuthenticatedIdentity
from stockroom.auth.jwt import (
    AuthConfig,
    RejectReason,
    VerificationResult,
    decode_token,
)
from stockroom.core.errors import NotAuthorizedError

logger = logging.getLogger(__name__)


class AccessGuard:
    """Verifies bearer tokens against the shared signing secret."""

    def __init__(self, config: AuthConfig):
        self.config = config

    def verify(self, token: str) -> VerificationResult:
        """Check a bare token's signature and expiry."""
        return decode_token(token, self.config)

    def check(self, authorization: str | None) -> VerificationResult:
        """
        Decide ADMIT or REJECT for a raw Authorization header value.

        The scheme segment only has to be present; "Bearer" is what clients
        send but it is not otherwise interpreted.
        """
        if not authorization:
            return VerificationResult.reject(RejectReason.MISSING_HEADER)

        parts = authorization.split()
        if len(parts) < 2:
            return VerificationResult.reject(RejectReason.MALFORMED_HEADER)

        return self.verify(parts[1])


# =============================================================================
# FastAPI Dependency
# =============================================================================


async def require_auth(request: Request) -> AuthenticatedIdentity:
    """
    Admit the request or raise NotAuthorizedError.

    Usage:
        app.include_router(api_router, prefix="/api", dependencies=[Depends(require_auth)])

        @router.get("/me")
        async def me(identity: AuthenticatedIdentity = Depends(require_auth)):
            return identity.to_dict()
    """
    guard: AccessGuard = request.app.state.guard
    result = guard.check(request.headers.get("Authorization"))

    if not result.ok:
        logger.warning(
            f"Rejected {request.method} {request.url.path}: {result.reason.value}"
            + (f" ({result.detail})" if result.detail else "")
        )
        raise NotAuthorizedError()

    request.state.identity = result.identity
    return result.identity
