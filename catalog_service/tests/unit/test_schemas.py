from decimal import Decimal

import pytest
from pydantic import ValidationError

from catalog_service.app.schemas.cache import ChangeDescriptor
from catalog_service.app.schemas.product import (
    OrderLine,
    ProductCreate,
    ProductSearchParams,
    ProductUpdate,
)


class TestProductCreate:
    def test_missing_fields_in_declared_order(self):
        assert ProductCreate().missing_fields() == [
            "name",
            "price",
            "stock",
            "category",
            "photo",
        ]

    def test_zero_stock_is_present(self):
        data = ProductCreate(
            name="Cable", price=Decimal("5"), stock=0, category="misc", photo="c.png"
        )
        assert data.missing_fields() == []

    @pytest.mark.parametrize("price", ["0", "-5"])
    def test_non_positive_price_reported_missing(self, price):
        data = ProductCreate(
            name="Cable", price=Decimal(price), stock=1, category="misc", photo="c.png"
        )
        assert data.missing_fields() == ["price"]


class TestProductUpdate:
    def test_blank_text_means_unchanged(self):
        update = ProductUpdate(name="  ", category="", photo=None)
        assert update.model_dump(exclude_none=True) == {}


class TestProductSearchParams:
    @pytest.mark.parametrize("raw", [None, "", "abc", "0", "-2"])
    def test_invalid_page_defaults_to_first(self, raw):
        assert ProductSearchParams(page=raw).page == 1

    def test_page_parsed(self):
        assert ProductSearchParams(page="3").page == 3

    def test_empty_strings_are_absent(self):
        params = ProductSearchParams(search="", sort="", category="", price="")
        product_filter = params.to_filter()
        assert product_filter.search is None
        assert product_filter.max_price is None
        assert product_filter.category is None
        assert params.sort is None

    def test_to_filter_carries_max_price(self):
        params = ProductSearchParams(search="foo", price="250", category="laptop")
        product_filter = params.to_filter()

        assert product_filter.search == "foo"
        assert product_filter.max_price == Decimal("250")
        assert product_filter.category == "laptop"


class TestOrderLine:
    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderLine(product_id=1, quantity=0)


class TestChangeDescriptor:
    def test_defaults_describe_no_change(self):
        descriptor = ChangeDescriptor()
        assert not descriptor.product
        assert not descriptor.order
        assert not descriptor.coupon
        assert descriptor.product_ids == []
