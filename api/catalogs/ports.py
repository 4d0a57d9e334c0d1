"""
Catalog repository ports.

`CatalogLookup` is the narrow slice the product side is allowed to see;
`CatalogRepository` is what `CatalogService` owns. Rows are plain dicts with
the columns id, name, description, created_at, updated_at.
"""

from __future__ import annotations

from typing import Any, Protocol


class CatalogLookup(Protocol):
    async def find_by_id(self, catalog_id: int) -> dict[str, Any] | None: ...


class CatalogRepository(CatalogLookup, Protocol):
    async def list_all(self) -> list[dict[str, Any]]:
        """Newest first."""
        ...

    async def find_by_name(self, name: str) -> dict[str, Any] | None: ...

    async def create(self, *, name: str, description: str | None = None) -> dict[str, Any]: ...

    async def update(self, catalog_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
        """Write only `fields`; None when no row has that id."""
        ...

    async def delete(self, catalog_id: int) -> bool: ...
