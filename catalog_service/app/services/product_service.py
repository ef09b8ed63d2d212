"""Product service for business logic"""

from typing import Optional, Union

from ..core.exceptions import ProductNotFoundError, ProductValidationError
from ..repository.product_repository import ProductRepository
from ..schemas.product import ProductCreate, ProductResponse, ProductUpdate
from ..utils.logging import setup_catalog_logging as setup_logging
from .cache.invalidation import CacheInvalidationService
from .photo_storage import LocalPhotoStorage

logger = setup_logging("product_service")


class ProductService:
    """Product writes; every successful write invalidates the read cache"""

    def __init__(
        self,
        repository: ProductRepository,
        invalidation: CacheInvalidationService,
        photo_storage: Optional[LocalPhotoStorage] = None,
    ):
        self.repository = repository
        self.invalidation = invalidation
        self.photo_storage = photo_storage

    async def _remove_photo(self, photo: Optional[str]) -> None:
        if self.photo_storage is not None:
            await self.photo_storage.remove(photo)

    async def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Create a new product"""
        missing = product_data.missing_fields()
        if missing:
            # The upload is orphaned once the request is rejected
            if "photo" not in missing:
                await self._remove_photo(product_data.photo)
            logger.warning(
                "Product creation rejected",
                extra={"missing_fields": missing},
            )
            raise ProductValidationError(missing=missing)

        try:
            product = await self.repository.create(
                name=product_data.name,
                price=product_data.price,
                stock=product_data.stock,
                category=product_data.category.lower(),
                photo=product_data.photo,
            )
        except Exception as e:
            logger.error(
                f"Failed to create product: {str(e)}",
                extra={"product_name": product_data.name, "error": str(e)},
                exc_info=True,
            )
            raise

        self.invalidation.invalidate_fields(product=True, admin=True)

        logger.info(
            "Product created successfully",
            extra={"product_id": product.id, "category": product.category},
        )
        return ProductResponse.model_validate(product)

    async def update_product(
        self, product_id: Union[int, str], product_data: ProductUpdate
    ) -> ProductResponse:
        """Update the provided fields of a product"""
        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id, "Invalid product ID")

        old_photo = None
        if product_data.photo:
            old_photo = product.photo
            product.photo = product_data.photo

        if product_data.name is not None:
            product.name = product_data.name
        if product_data.price is not None:
            product.price = product_data.price
        if product_data.stock is not None:
            product.stock = product_data.stock
        if product_data.category is not None:
            product.category = product_data.category.lower()

        try:
            product = await self.repository.save(product)
        except Exception as e:
            logger.error(
                f"Failed to update product: {str(e)}",
                extra={"product_id": product_id, "error": str(e)},
                exc_info=True,
            )
            raise

        if old_photo and old_photo != product.photo:
            await self._remove_photo(old_photo)

        self.invalidation.invalidate_fields(
            product=True, product_id=product.id, admin=True
        )

        logger.info(
            "Product updated successfully",
            extra={
                "product_id": product.id,
                "updated_fields": sorted(product_data.model_dump(exclude_none=True)),
            },
        )
        return ProductResponse.model_validate(product)

    async def delete_product(self, product_id: Union[int, str]) -> None:
        """Delete a product and its photo"""
        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id, "Product not found")

        deleted_id = product.id
        photo = product.photo
        try:
            await self.repository.delete_one(product)
        except Exception as e:
            logger.error(
                f"Failed to delete product: {str(e)}",
                extra={"product_id": deleted_id, "error": str(e)},
                exc_info=True,
            )
            raise

        await self._remove_photo(photo)
        self.invalidation.invalidate_fields(product=True, product_id=deleted_id)

        logger.info("Product deleted successfully", extra={"product_id": deleted_id})
