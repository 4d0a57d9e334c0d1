"""
In-process storage backend (STORAGE_BACKEND=memory).

Mirrors the Postgres schema rules that the services rely on as a backstop:
unique names, catalog references that must resolve, and ON DELETE SET NULL
for products of a deleted catalog. Rows handed out are copies.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from .errors import ConflictError, NotFoundError


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _newest_first(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)


class MemoryStore:
    def __init__(self) -> None:
        self.catalogs: dict[int, dict[str, Any]] = {}
        self.products: dict[int, dict[str, Any]] = {}
        self._catalog_ids = itertools.count(1)
        self._product_ids = itertools.count(1)

    def next_catalog_id(self) -> int:
        return next(self._catalog_ids)

    def next_product_id(self) -> int:
        return next(self._product_ids)


class MemoryCatalogRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def _check_unique(self, name: str, exclude_id: int | None = None) -> None:
        for row in self._store.catalogs.values():
            if row["name"] == name and row["id"] != exclude_id:
                raise ConflictError(f'Catalog with name "{name}" already exists')

    async def list_all(self) -> list[dict[str, Any]]:
        return [dict(r) for r in _newest_first(list(self._store.catalogs.values()))]

    async def find_by_id(self, catalog_id: int) -> dict[str, Any] | None:
        row = self._store.catalogs.get(catalog_id)
        return dict(row) if row is not None else None

    async def find_by_name(self, name: str) -> dict[str, Any] | None:
        for row in self._store.catalogs.values():
            if row["name"] == name:
                return dict(row)
        return None

    async def create(self, *, name: str, description: str | None = None) -> dict[str, Any]:
        self._check_unique(name)
        now = _utc_now()
        row = {
            "id": self._store.next_catalog_id(),
            "name": name,
            "description": description,
            "created_at": now,
            "updated_at": now,
        }
        self._store.catalogs[row["id"]] = row
        return dict(row)

    async def update(self, catalog_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
        row = self._store.catalogs.get(catalog_id)
        if row is None:
            return None
        if "name" in fields:
            self._check_unique(fields["name"], exclude_id=catalog_id)
        for column in ("name", "description"):
            if column in fields:
                row[column] = fields[column]
        row["updated_at"] = _utc_now()
        return dict(row)

    async def delete(self, catalog_id: int) -> bool:
        if self._store.catalogs.pop(catalog_id, None) is None:
            return False
        for product in self._store.products.values():
            if product["catalog_id"] == catalog_id:
                product["catalog_id"] = None
                product["updated_at"] = _utc_now()
        return True


class MemoryProductRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def _check_unique(self, name: str, exclude_id: int | None = None) -> None:
        for row in self._store.products.values():
            if row["name"] == name and row["id"] != exclude_id:
                raise ConflictError(f'Product with name "{name}" already exists')

    def _check_catalog(self, catalog_id: int | None) -> None:
        if catalog_id is not None and catalog_id not in self._store.catalogs:
            raise NotFoundError("Referenced catalog not found")

    async def list_all(self) -> list[dict[str, Any]]:
        return [dict(r) for r in _newest_first(list(self._store.products.values()))]

    async def list_unassigned(self) -> list[dict[str, Any]]:
        rows = [r for r in self._store.products.values() if r["catalog_id"] is None]
        return [dict(r) for r in _newest_first(rows)]

    async def find_by_id(self, product_id: int) -> dict[str, Any] | None:
        row = self._store.products.get(product_id)
        return dict(row) if row is not None else None

    async def find_by_name(self, name: str) -> dict[str, Any] | None:
        for row in self._store.products.values():
            if row["name"] == name:
                return dict(row)
        return None

    async def create(
        self,
        *,
        name: str,
        price: Decimal,
        stock_quantity: int = 0,
        description: str | None = None,
        catalog_id: int | None = None,
    ) -> dict[str, Any]:
        self._check_unique(name)
        self._check_catalog(catalog_id)
        now = _utc_now()
        row = {
            "id": self._store.next_product_id(),
            "name": name,
            "description": description,
            "price": Decimal(price),
            "stock_quantity": stock_quantity,
            "catalog_id": catalog_id,
            "created_at": now,
            "updated_at": now,
        }
        self._store.products[row["id"]] = row
        return dict(row)

    async def update(self, product_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
        row = self._store.products.get(product_id)
        if row is None:
            return None
        if "name" in fields:
            self._check_unique(fields["name"], exclude_id=product_id)
        if "catalog_id" in fields:
            self._check_catalog(fields["catalog_id"])
        for column in ("name", "description", "price", "stock_quantity", "catalog_id"):
            if column in fields:
                row[column] = fields[column]
        row["updated_at"] = _utc_now()
        return dict(row)

    async def delete(self, product_id: int) -> bool:
        return self._store.products.pop(product_id, None) is not None

    async def assign_to_catalog(self, product_id: int, catalog_id: int) -> dict[str, Any] | None:
        return await self.update(product_id, {"catalog_id": catalog_id})

    async def remove_from_catalog(self, product_id: int) -> dict[str, Any] | None:
        return await self.update(product_id, {"catalog_id": None})

    async def clear_catalog(self, catalog_id: int) -> int:
        changed = 0
        for row in self._store.products.values():
            if row["catalog_id"] == catalog_id:
                row["catalog_id"] = None
                row["updated_at"] = _utc_now()
                changed += 1
        return changed
