"""
Tests for list query parsing and the sort/filter allow-lists.
"""

import pytest

from stockroom.api.query import MAX_PAGE_SIZE, parse_list_query
from stockroom.core.errors import InputError
from stockroom.storage.base import PRODUCT_FIELDS, PROVIDER_FIELDS
from stockroom.storage.models import Product, Provider


class TestParseListQuery:
    def test_defaults(self):
        query = parse_list_query(PRODUCT_FIELDS, Product)

        assert query.page == 1
        assert query.page_size == 5
        assert query.order_by == "created_at"
        assert query.descending is False
        assert query.filter_field is None
        assert query.offset == 0

    def test_wire_names_map_to_attributes(self):
        query = parse_list_query(
            PRODUCT_FIELDS,
            Product,
            page=3,
            page_size=10,
            order_by="providerId",
            sort_order="DESC",
        )

        assert query.order_by == "provider_id"
        assert query.descending is True
        assert query.offset == 20

    def test_filter_value_coerced_to_column_type(self):
        query = parse_list_query(PRODUCT_FIELDS, Product, filter_property="price", filter_value="9.5")

        assert query.filter_field == "price"
        assert query.filter_value == 9.5

    def test_string_filter(self):
        query = parse_list_query(
            PROVIDER_FIELDS, Provider, filter_property="name", filter_value="Evergreen Energy"
        )

        assert query.filter_field == "name"
        assert query.filter_value == "Evergreen Energy"

    def test_page_size_capped(self):
        query = parse_list_query(PROVIDER_FIELDS, Provider, page_size=10_000)

        assert query.page_size == MAX_PAGE_SIZE

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"order_by": "password_hash"},
            {"order_by": "__class__"},
            {"order_by": "created_at"},
            {"sort_order": "sideways"},
            {"page": 0},
            {"page_size": -1},
            {"page": 10**19},
            {"filter_property": "createdAt", "filter_value": "x"},
            {"filter_property": "price", "filter_value": "cheap"},
            {"filter_property": "name"},
        ],
    )
    def test_rejected(self, kwargs):
        with pytest.raises(InputError):
            parse_list_query(PRODUCT_FIELDS, Product, **kwargs)
