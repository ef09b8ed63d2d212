from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from catalog_service.app.core.exceptions import (
    ProductNotFoundError,
    ProductValidationError,
    StoreUnavailableError,
)
from catalog_service.app.repository.product_repository import ProductRepository
from catalog_service.app.schemas.product import ProductCreate, ProductUpdate
from catalog_service.app.services.photo_storage import LocalPhotoStorage
from catalog_service.app.services.product_service import ProductService
from conftest import make_product


class TestProductService:
    """Write paths and the invalidation each one triggers."""

    @pytest.fixture
    def mock_repository(self):
        return Mock(spec=ProductRepository)

    @pytest.fixture
    def mock_photo_storage(self):
        storage = Mock(spec=LocalPhotoStorage)
        storage.remove = AsyncMock(return_value=True)
        return storage

    @pytest.fixture
    def populated_cache(self, cache_store):
        for key in [
            "latest-products",
            "categories",
            "all-products",
            "product-1",
            "product-2",
            "all-orders",
        ]:
            cache_store.set(key, "[]")
        return cache_store

    @pytest.fixture
    def product_service(self, mock_repository, invalidation, mock_photo_storage):
        return ProductService(mock_repository, invalidation, mock_photo_storage)

    @pytest.fixture
    def sample_product_create(self):
        return ProductCreate(
            name="MacBook Air",
            price=Decimal("999.00"),
            stock=5,
            category="Laptop",
            photo="uploads/macbook.png",
        )

    # Tests for create_product
    @pytest.mark.asyncio
    async def test_create_product_success(
        self, product_service, mock_repository, populated_cache, sample_product_create
    ):
        mock_repository.create = AsyncMock(
            return_value=make_product(3, name="MacBook Air", category="laptop")
        )

        result = await product_service.create_product(sample_product_create)

        assert result.id == 3
        mock_repository.create.assert_awaited_once_with(
            name="MacBook Air",
            price=Decimal("999.00"),
            stock=5,
            category="laptop",
            photo="uploads/macbook.png",
        )
        assert set(populated_cache.keys()) == {"product-1", "product-2", "all-orders"}

    @pytest.mark.asyncio
    async def test_create_product_missing_fields(
        self, product_service, mock_repository, mock_photo_storage, populated_cache
    ):
        mock_repository.create = AsyncMock()

        with pytest.raises(ProductValidationError) as exc_info:
            await product_service.create_product(
                ProductCreate(name="Phone", photo="uploads/phone.png")
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.missing_fields == ["price", "stock", "category"]
        mock_repository.create.assert_not_awaited()
        mock_photo_storage.remove.assert_awaited_once_with("uploads/phone.png")
        assert len(populated_cache) == 6

    @pytest.mark.asyncio
    async def test_create_product_without_photo_removes_nothing(
        self, product_service, mock_photo_storage
    ):
        with pytest.raises(ProductValidationError) as exc_info:
            await product_service.create_product(
                ProductCreate(name="Phone", price=Decimal("10"), stock=1, category="x")
            )

        assert exc_info.value.missing_fields == ["photo"]
        mock_photo_storage.remove.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_product_zero_price_removes_photo(
        self, product_service, mock_repository, mock_photo_storage
    ):
        mock_repository.create = AsyncMock()

        with pytest.raises(ProductValidationError) as exc_info:
            await product_service.create_product(
                ProductCreate(
                    name="Freebie",
                    price=Decimal("0"),
                    stock=1,
                    category="misc",
                    photo="uploads/free.png",
                )
            )

        assert exc_info.value.missing_fields == ["price"]
        mock_repository.create.assert_not_awaited()
        mock_photo_storage.remove.assert_awaited_once_with("uploads/free.png")

    @pytest.mark.asyncio
    async def test_create_product_blank_name_is_missing(self, product_service):
        with pytest.raises(ProductValidationError) as exc_info:
            await product_service.create_product(
                ProductCreate(
                    name="   ",
                    price=Decimal("10"),
                    stock=1,
                    category="x",
                    photo="p.png",
                )
            )

        assert exc_info.value.missing_fields == ["name"]

    @pytest.mark.asyncio
    async def test_create_product_store_failure_keeps_cache(
        self, product_service, mock_repository, populated_cache, sample_product_create
    ):
        mock_repository.create = AsyncMock(side_effect=StoreUnavailableError("create"))

        with pytest.raises(StoreUnavailableError):
            await product_service.create_product(sample_product_create)

        assert len(populated_cache) == 6

    # Tests for update_product
    @pytest.mark.asyncio
    async def test_update_product_success(
        self, product_service, mock_repository, populated_cache
    ):
        product = make_product(1)
        mock_repository.find_by_id = AsyncMock(return_value=product)
        mock_repository.save = AsyncMock(side_effect=lambda p: p)

        result = await product_service.update_product(
            1, ProductUpdate(price=Decimal("80.00"), category="Phone")
        )

        assert result.price == Decimal("80.00")
        assert result.category == "phone"
        assert result.name == "Product 1"
        assert set(populated_cache.keys()) == {"product-2", "all-orders"}

    @pytest.mark.asyncio
    async def test_update_product_zero_stock_is_applied(
        self, product_service, mock_repository
    ):
        mock_repository.find_by_id = AsyncMock(return_value=make_product(1))
        mock_repository.save = AsyncMock(side_effect=lambda p: p)

        result = await product_service.update_product(1, ProductUpdate(stock=0))

        assert result.stock == 0

    @pytest.mark.asyncio
    async def test_update_product_replaces_photo(
        self, product_service, mock_repository, mock_photo_storage
    ):
        mock_repository.find_by_id = AsyncMock(return_value=make_product(1))
        mock_repository.save = AsyncMock(side_effect=lambda p: p)

        result = await product_service.update_product(
            1, ProductUpdate(photo="uploads/new.png")
        )

        assert result.photo == "uploads/new.png"
        mock_photo_storage.remove.assert_awaited_once_with("uploads/1.png")

    @pytest.mark.asyncio
    async def test_update_product_not_found(
        self, product_service, mock_repository, populated_cache
    ):
        mock_repository.find_by_id = AsyncMock(return_value=None)
        mock_repository.save = AsyncMock()

        with pytest.raises(ProductNotFoundError) as exc_info:
            await product_service.update_product(999, ProductUpdate(name="x"))

        assert exc_info.value.message == "Invalid product ID"
        mock_repository.save.assert_not_awaited()
        assert len(populated_cache) == 6

    # Tests for delete_product
    @pytest.mark.asyncio
    async def test_delete_product_success(
        self, product_service, mock_repository, mock_photo_storage, populated_cache
    ):
        product = make_product(2)
        mock_repository.find_by_id = AsyncMock(return_value=product)
        mock_repository.delete_one = AsyncMock()

        await product_service.delete_product(2)

        mock_repository.delete_one.assert_awaited_once_with(product)
        mock_photo_storage.remove.assert_awaited_once_with("uploads/2.png")
        assert set(populated_cache.keys()) == {"product-1", "all-orders"}

    @pytest.mark.asyncio
    async def test_delete_product_not_found(self, product_service, mock_repository):
        mock_repository.find_by_id = AsyncMock(return_value=None)
        mock_repository.delete_one = AsyncMock()

        with pytest.raises(ProductNotFoundError):
            await product_service.delete_product(404)

        mock_repository.delete_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_service_without_photo_storage(
        self, mock_repository, invalidation
    ):
        service = ProductService(mock_repository, invalidation)
        mock_repository.find_by_id = AsyncMock(return_value=make_product(1))
        mock_repository.delete_one = AsyncMock()

        await service.delete_product(1)

        mock_repository.delete_one.assert_awaited_once()
