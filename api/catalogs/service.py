"""
Catalog business logic.

Owns the catalog lifecycle and the catalog side of product membership. The
product side is reached only through the `ProductAssignments` port, never
through `ProductService`.
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import ConflictError, NotFoundError, internal_errors
from products.ports import ProductAssignments

from .ports import CatalogRepository

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, catalogs: CatalogRepository, products: ProductAssignments) -> None:
        self._catalogs = catalogs
        self._products = products

    async def list_catalogs(self) -> list[dict[str, Any]]:
        with internal_errors("list catalogs"):
            return await self._catalogs.list_all()

    async def get_catalog(self, catalog_id: int) -> dict[str, Any]:
        with internal_errors("get catalog"):
            catalog = await self._catalogs.find_by_id(catalog_id)
        if catalog is None:
            raise NotFoundError(f"Catalog with ID {catalog_id} not found")
        return catalog

    async def create_catalog(self, name: str, description: str | None = None) -> dict[str, Any]:
        with internal_errors("create catalog"):
            await self._ensure_name_available(name)
            catalog = await self._catalogs.create(name=name, description=description)
        logger.info("catalog_created id=%s name=%r", catalog["id"], name)
        return catalog

    async def update_catalog(self, catalog_id: int, patch: dict[str, Any]) -> dict[str, Any]:
        await self.get_catalog(catalog_id)

        with internal_errors("update catalog"):
            if patch.get("name") is not None:
                await self._ensure_name_available(patch["name"], exclude_id=catalog_id)
            updated = await self._catalogs.update(catalog_id, patch)
        if updated is None:
            raise NotFoundError(f"Catalog with ID {catalog_id} not found")
        return updated

    async def delete_catalog(self, catalog_id: int) -> None:
        await self.get_catalog(catalog_id)

        with internal_errors("delete catalog"):
            # Orphan members first so no product ever points at a missing catalog.
            orphaned = await self._products.clear_catalog(catalog_id)
            deleted = await self._catalogs.delete(catalog_id)
        if not deleted:
            raise NotFoundError(f"Catalog with ID {catalog_id} not found")
        logger.info("catalog_deleted id=%s orphaned_products=%s", catalog_id, orphaned)

    async def list_products_in_catalog(self, catalog_id: int) -> list[dict[str, Any]]:
        await self.get_catalog(catalog_id)

        with internal_errors("get products for catalog"):
            products = await self._products.list_all()
        return [p for p in products if p["catalog_id"] == catalog_id]

    async def assign_product_to_catalog(self, catalog_id: int, product_id: int) -> dict[str, Any]:
        await self.get_catalog(catalog_id)
        await self._get_product(product_id)

        with internal_errors("assign product to catalog"):
            updated = await self._products.assign_to_catalog(product_id, catalog_id)
        if updated is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return updated

    async def unassign_product_from_catalog(self, catalog_id: int, product_id: int) -> dict[str, Any]:
        await self.get_catalog(catalog_id)
        product = await self._get_product(product_id)

        if product["catalog_id"] != catalog_id:
            raise NotFoundError(
                f"Product with ID {product_id} does not belong to catalog {catalog_id}"
            )

        with internal_errors("remove product from catalog"):
            updated = await self._products.remove_from_catalog(product_id)
        if updated is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return updated

    async def _get_product(self, product_id: int) -> dict[str, Any]:
        with internal_errors("get product"):
            product = await self._products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    async def _ensure_name_available(self, name: str, *, exclude_id: int | None = None) -> None:
        existing = await self._catalogs.find_by_name(name)
        if existing is not None and existing["id"] != exclude_id:
            raise ConflictError(f'Catalog with name "{name}" already exists')
