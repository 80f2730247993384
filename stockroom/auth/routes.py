# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /signup  - Create account, returns a token (201)
#   POST /login   - Exchange credentials for a token
#
# Failures are raised as taxonomy errors and rendered by the app's
# exception handlers.
#
# =============================================================================

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from stockroom.auth.service import CredentialService
from stockroom.storage.session import get_db
from stockroom.storage.sql import SqlUserRepository

router = APIRouter(tags=["auth"])


# =============================================================================
# Request/Response Models
# =============================================================================

class CredentialsRequest(BaseModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


# =============================================================================
# Dependencies
# =============================================================================

def get_credential_service(
    request: Request,
    db: Session = Depends(get_db),
) -> CredentialService:
    return CredentialService(users=SqlUserRepository(db), issuer=request.app.state.issuer)


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    data: CredentialsRequest,
    service: CredentialService = Depends(get_credential_service),
):
    """
    Create a new account.

    Returns a token on success.
    """
    token = await run_in_threadpool(service.sign_up, data.username, data.password)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: CredentialsRequest,
    service: CredentialService = Depends(get_credential_service),
):
    """
    Authenticate and get a token.
    """
    token = await run_in_threadpool(service.log_in, data.username, data.password)
    return TokenResponse(token=token)
