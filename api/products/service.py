"""
Product business logic.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from catalogs.ports import CatalogLookup
from core.errors import ConflictError, NotFoundError, internal_errors

from .ports import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, products: ProductRepository, catalogs: CatalogLookup) -> None:
        self._products = products
        self._catalogs = catalogs

    async def list_products(self) -> list[dict[str, Any]]:
        with internal_errors("list products"):
            return await self._products.list_all()

    async def list_unassigned_products(self) -> list[dict[str, Any]]:
        with internal_errors("list unassigned products"):
            return await self._products.list_unassigned()

    async def get_product(self, product_id: int) -> dict[str, Any]:
        with internal_errors("get product"):
            product = await self._products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    async def create_product(
        self,
        name: str,
        price: Decimal,
        stock_quantity: int = 0,
        description: str | None = None,
        catalog_id: int | None = None,
    ) -> dict[str, Any]:
        with internal_errors("create product"):
            await self._ensure_name_available(name)
            if catalog_id is not None:
                await self._ensure_catalog_exists(catalog_id)
            product = await self._products.create(
                name=name,
                price=price,
                stock_quantity=stock_quantity,
                description=description,
                catalog_id=catalog_id,
            )
        logger.info("product_created id=%s name=%r catalog_id=%s", product["id"], name, catalog_id)
        return product

    async def update_product(self, product_id: int, patch: dict[str, Any]) -> dict[str, Any]:
        """
        Apply a partial update. The write doubles as the existence check, so
        name and catalog checks run before we know the product is there.

        An explicit `catalog_id: None` in the patch unassigns the product.
        """
        with internal_errors("update product"):
            if patch.get("name") is not None:
                await self._ensure_name_available(patch["name"], exclude_id=product_id)
            if patch.get("catalog_id") is not None:
                await self._ensure_catalog_exists(patch["catalog_id"])
            updated = await self._products.update(product_id, patch)
        if updated is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return updated

    async def delete_product(self, product_id: int) -> None:
        with internal_errors("delete product"):
            deleted = await self._products.delete(product_id)
        if not deleted:
            raise NotFoundError(f"Product with ID {product_id} not found")
        logger.info("product_deleted id=%s", product_id)

    async def assign_to_catalog(self, product_id: int, catalog_id: int) -> dict[str, Any]:
        with internal_errors("assign product to catalog"):
            await self._ensure_catalog_exists(catalog_id)
            updated = await self._products.assign_to_catalog(product_id, catalog_id)
        if updated is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return updated

    async def remove_from_catalog(self, product_id: int) -> dict[str, Any]:
        # Idempotent: an unassigned product stays unassigned.
        with internal_errors("remove product from catalog"):
            updated = await self._products.remove_from_catalog(product_id)
        if updated is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return updated

    async def _ensure_name_available(self, name: str, *, exclude_id: int | None = None) -> None:
        existing = await self._products.find_by_name(name)
        if existing is not None and existing["id"] != exclude_id:
            raise ConflictError(f'Product with name "{name}" already exists')

    async def _ensure_catalog_exists(self, catalog_id: int) -> None:
        if await self._catalogs.find_by_id(catalog_id) is None:
            raise NotFoundError(f"Catalog with ID {catalog_id} not found")
