"""
Product persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import asyncpg

from core import db
from core.errors import ConflictError, NotFoundError

PRODUCT_COLUMNS = (
    "id, name, description, price, stock_quantity, catalog_id, created_at, updated_at"
)

UPDATABLE_COLUMNS = ("name", "description", "price", "stock_quantity", "catalog_id")


def _translate_integrity_error(exc: asyncpg.IntegrityConstraintViolationError, name: str | None) -> Exception:
    if isinstance(exc, asyncpg.UniqueViolationError):
        return ConflictError(f'Product with name "{name}" already exists')
    if isinstance(exc, asyncpg.ForeignKeyViolationError):
        # The catalog was deleted between the existence check and the write.
        return NotFoundError("Referenced catalog not found")
    return exc


class PostgresProductRepository:
    async def list_all(self) -> list[dict[str, Any]]:
        return await db.fetch_all(
            f"""
            SELECT {PRODUCT_COLUMNS}
            FROM products
            ORDER BY created_at DESC, id DESC
            """
        )

    async def list_unassigned(self) -> list[dict[str, Any]]:
        return await db.fetch_all(
            f"""
            SELECT {PRODUCT_COLUMNS}
            FROM products
            WHERE catalog_id IS NULL
            ORDER BY created_at DESC, id DESC
            """
        )

    async def find_by_id(self, product_id: int) -> dict[str, Any] | None:
        return await db.fetch_one(
            f"""
            SELECT {PRODUCT_COLUMNS}
            FROM products
            WHERE id = $1
            """,
            product_id,
        )

    async def find_by_name(self, name: str) -> dict[str, Any] | None:
        return await db.fetch_one(
            f"""
            SELECT {PRODUCT_COLUMNS}
            FROM products
            WHERE name = $1
            """,
            name,
        )

    async def create(
        self,
        *,
        name: str,
        price: Decimal,
        stock_quantity: int = 0,
        description: str | None = None,
        catalog_id: int | None = None,
    ) -> dict[str, Any]:
        try:
            row = await db.fetch_one(
                f"""
                INSERT INTO products (name, description, price, stock_quantity, catalog_id)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {PRODUCT_COLUMNS}
                """,
                name,
                description,
                price,
                stock_quantity,
                catalog_id,
            )
        except asyncpg.IntegrityConstraintViolationError as exc:
            raise _translate_integrity_error(exc, name) from exc
        if row is None:
            raise RuntimeError("Failed to create product.")
        return row

    async def update(self, product_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
        columns = [c for c in UPDATABLE_COLUMNS if c in fields]
        assignments = [f"{c} = ${i}" for i, c in enumerate(columns, start=2)]
        assignments.append("updated_at = now()")

        try:
            return await db.fetch_one(
                f"""
                UPDATE products
                SET {", ".join(assignments)}
                WHERE id = $1
                RETURNING {PRODUCT_COLUMNS}
                """,
                product_id,
                *(fields[c] for c in columns),
            )
        except asyncpg.IntegrityConstraintViolationError as exc:
            raise _translate_integrity_error(exc, fields.get("name")) from exc

    async def delete(self, product_id: int) -> bool:
        status = await db.execute(
            """
            DELETE FROM products
            WHERE id = $1
            """,
            product_id,
        )
        return db.affected_rows(status) > 0

    async def assign_to_catalog(self, product_id: int, catalog_id: int) -> dict[str, Any] | None:
        return await self.update(product_id, {"catalog_id": catalog_id})

    async def remove_from_catalog(self, product_id: int) -> dict[str, Any] | None:
        return await self.update(product_id, {"catalog_id": None})

    async def clear_catalog(self, catalog_id: int) -> int:
        status = await db.execute(
            """
            UPDATE products
            SET catalog_id = NULL,
                updated_at = now()
            WHERE catalog_id = $1
            """,
            catalog_id,
        )
        return db.affected_rows(status)
