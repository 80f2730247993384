"""
Provider routes. Mounted under /api behind the access guard.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from stockroom.api.query import list_query_dependency
from stockroom.core.errors import NotFoundError
from stockroom.storage.base import PROVIDER_FIELDS, ListQuery
from stockroom.storage.models import Provider
from stockroom.storage.session import get_db
from stockroom.storage.sql import SqlProviderRepository

router = APIRouter(prefix="/provider", tags=["providers"])


# =============================================================================
# Request/Response Models
# =============================================================================


class ProviderRequest(BaseModel):
    name: str
    description: str
    address: str
    phone: str


class ProviderSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    phone: str
    address: str


class ProviderDetail(ProviderSummary):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class ProviderListResponse(BaseModel):
    data: list[ProviderSummary]


class ProviderResponse(BaseModel):
    data: ProviderDetail


class MessageResponse(BaseModel):
    message: str


def get_providers(db: Session = Depends(get_db)) -> SqlProviderRepository:
    return SqlProviderRepository(db)


def _detail(provider: Provider) -> ProviderResponse:
    return ProviderResponse(data=ProviderDetail.model_validate(provider))


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=ProviderListResponse)
def list_providers(
    query: ListQuery = Depends(list_query_dependency(PROVIDER_FIELDS, Provider)),
    providers: SqlProviderRepository = Depends(get_providers),
):
    """
    List providers with pagination, sorting and filtering.

    Example:
        GET /api/provider?page=1&pageSize=10&orderBy=name&sortOrder=desc&filterProperty=name&filterValue=Evergreen%20Energy
    """
    items = providers.list(query)
    return ProviderListResponse(data=[ProviderSummary.model_validate(p) for p in items])


@router.get("/{provider_id}", response_model=ProviderResponse)
def get_provider(provider_id: str, providers: SqlProviderRepository = Depends(get_providers)):
    provider = providers.get(provider_id)
    if provider is None:
        raise NotFoundError("Provider", provider_id)
    return _detail(provider)


@router.post("", response_model=ProviderResponse, status_code=201)
def create_provider(data: ProviderRequest, providers: SqlProviderRepository = Depends(get_providers)):
    return _detail(providers.create(data.model_dump()))


@router.put("/{provider_id}", response_model=ProviderResponse)
def update_provider(
    provider_id: str,
    data: ProviderRequest,
    providers: SqlProviderRepository = Depends(get_providers),
):
    return _detail(providers.update(provider_id, data.model_dump()))


@router.delete("/{provider_id}", response_model=MessageResponse)
def delete_provider(provider_id: str, providers: SqlProviderRepository = Depends(get_providers)):
    """Delete a provider together with its products."""
    providers.delete(provider_id)
    return MessageResponse(message="Provider deleted successfully")
