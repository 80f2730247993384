"""
Product routes. Mounted under /api behind the access guard.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from stockroom.api.query import list_query_dependency
from stockroom.core.errors import NotFoundError
from stockroom.storage.base import PRODUCT_FIELDS, ListQuery
from stockroom.storage.models import Product
from stockroom.storage.session import get_db
from stockroom.storage.sql import SqlProductRepository

router = APIRouter(prefix="/product", tags=["products"])


# =============================================================================
# Request/Response Models
# =============================================================================


class ProductRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    price: float
    description: str
    provider_id: str = Field(alias="providerId")


class ProductSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: float


class ProductDetail(ProductSummary):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    provider_id: str = Field(alias="providerId")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class ProductListResponse(BaseModel):
    data: list[ProductSummary]


class ProductResponse(BaseModel):
    data: ProductDetail


def get_products(db: Session = Depends(get_db)) -> SqlProductRepository:
    return SqlProductRepository(db)


def _detail(product: Product) -> ProductResponse:
    return ProductResponse(data=ProductDetail.model_validate(product))


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=ProductListResponse)
def list_products(
    query: ListQuery = Depends(list_query_dependency(PRODUCT_FIELDS, Product)),
    products: SqlProductRepository = Depends(get_products),
):
    """
    List products.

    Example:
        GET /api/product?page=1&pageSize=10&orderBy=price&sortOrder=desc
    """
    items = products.list(query)
    return ProductListResponse(data=[ProductSummary.model_validate(p) for p in items])


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, products: SqlProductRepository = Depends(get_products)):
    product = products.get(product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return _detail(product)


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(data: ProductRequest, products: SqlProductRepository = Depends(get_products)):
    """Create a product for an existing provider."""
    return _detail(products.create(data.model_dump()))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    data: ProductRequest,
    products: SqlProductRepository = Depends(get_products),
):
    return _detail(products.update(product_id, data.model_dump()))


@router.delete("/{product_id}", response_model=ProductResponse)
def delete_product(product_id: str, products: SqlProductRepository = Depends(get_products)):
    """Delete a product and return what was removed."""
    return _detail(products.delete(product_id))
