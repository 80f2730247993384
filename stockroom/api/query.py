"""
List query parsing: pagination, sorting and filtering.

Sort and filter field names arrive as camelCase wire names and are
resolved through an entity's allow-list before anything reaches the
query builder. Unknown names are input errors.
"""

from __future__ import annotations

from typing import Callable

from fastapi import Query
from sqlalchemy import inspect as sa_inspect

from stockroom.core.errors import InputError
from stockroom.storage.base import EntityFields, ListQuery

DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100
MAX_OFFSET = 2**63 - 1
DEFAULT_ORDER_BY = "createdAt"


def parse_list_query(
    fields: EntityFields,
    model: type,
    *,
    page: int | None = None,
    page_size: int | None = None,
    order_by: str | None = None,
    sort_order: str | None = None,
    filter_property: str | None = None,
    filter_value: str | None = None,
) -> ListQuery:
    """
    Validate raw query parameters against an entity's allow-list.

    Raises:
        InputError: unknown field, bad sort order, or out-of-range paging
    """
    page = page if page is not None else 1
    page_size = page_size if page_size is not None else DEFAULT_PAGE_SIZE
    if page < 1 or page_size < 1:
        raise InputError(f"Invalid paging: page={page} pageSize={page_size}")
    page_size = min(page_size, MAX_PAGE_SIZE)
    if (page - 1) * page_size > MAX_OFFSET:
        raise InputError(f"Page out of range: {page}")

    order_key = order_by or DEFAULT_ORDER_BY
    if order_key not in fields.sortable:
        raise InputError(f"Cannot sort by: {order_key}")

    direction = (sort_order or "asc").lower()
    if direction not in ("asc", "desc"):
        raise InputError(f"Invalid sort order: {sort_order}")

    filter_field = None
    value = None
    if filter_property:
        if filter_property not in fields.filterable:
            raise InputError(f"Cannot filter by: {filter_property}")
        filter_field = fields.filterable[filter_property]
        value = _coerce(model, filter_field, filter_value)

    return ListQuery(
        page=page,
        page_size=page_size,
        order_by=fields.sortable[order_key],
        descending=direction == "desc",
        filter_field=filter_field,
        filter_value=value,
    )


def _coerce(model: type, attribute: str, raw: str | None):
    """Convert a filter value to the column's Python type."""
    if raw is None:
        raise InputError(f"Missing filterValue for {attribute}")
    python_type = sa_inspect(model).columns[attribute].type.python_type
    if python_type is str:
        return raw
    try:
        return python_type(raw)
    except (TypeError, ValueError):
        raise InputError(f"Invalid filterValue for {attribute}: {raw!r}")


def list_query_dependency(fields: EntityFields, model: type) -> Callable[..., ListQuery]:
    """
    Build a FastAPI dependency reading the list query parameters.

    Usage:
        @router.get("")
        def list_items(query: ListQuery = Depends(list_query_dependency(FIELDS, Item))):
            ...
    """

    def dependency(
        page: int | None = Query(default=None),
        page_size: int | None = Query(default=None, alias="pageSize"),
        order_by: str | None = Query(default=None, alias="orderBy"),
        sort_order: str | None = Query(default=None, alias="sortOrder"),
        filter_property: str | None = Query(default=None, alias="filterProperty"),
        filter_value: str | None = Query(default=None, alias="filterValue"),
    ) -> ListQuery:
        return parse_list_query(
            fields,
            model,
            page=page,
            page_size=page_size,
            order_by=order_by,
            sort_order=sort_order,
            filter_property=filter_property,
            filter_value=filter_value,
        )

    return dependency
