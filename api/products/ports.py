"""
Product repository ports.

`ProductAssignments` is the slice `CatalogService` depends on;
`ProductRepository` is the full port owned by `ProductService`.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol


class ProductAssignments(Protocol):
    async def find_by_id(self, product_id: int) -> dict[str, Any] | None: ...

    async def list_all(self) -> list[dict[str, Any]]:
        """Newest first."""
        ...

    async def assign_to_catalog(self, product_id: int, catalog_id: int) -> dict[str, Any] | None:
        """None when no product has that id."""
        ...

    async def remove_from_catalog(self, product_id: int) -> dict[str, Any] | None: ...

    async def clear_catalog(self, catalog_id: int) -> int:
        """Null every reference to `catalog_id`; returns how many rows changed."""
        ...


class ProductRepository(ProductAssignments, Protocol):
    async def find_by_name(self, name: str) -> dict[str, Any] | None: ...

    async def list_unassigned(self) -> list[dict[str, Any]]: ...

    async def create(
        self,
        *,
        name: str,
        price: Decimal,
        stock_quantity: int = 0,
        description: str | None = None,
        catalog_id: int | None = None,
    ) -> dict[str, Any]: ...

    async def update(self, product_id: int, fields: dict[str, Any]) -> dict[str, Any] | None: ...

    async def delete(self, product_id: int) -> bool: ...
