"""
Catalog persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db
from core.errors import ConflictError

CATALOG_COLUMNS = "id, name, description, created_at, updated_at"

# Columns a patch may touch; anything else is ignored.
UPDATABLE_COLUMNS = ("name", "description")


class PostgresCatalogRepository:
    async def list_all(self) -> list[dict[str, Any]]:
        return await db.fetch_all(
            f"""
            SELECT {CATALOG_COLUMNS}
            FROM catalogs
            ORDER BY created_at DESC, id DESC
            """
        )

    async def find_by_id(self, catalog_id: int) -> dict[str, Any] | None:
        return await db.fetch_one(
            f"""
            SELECT {CATALOG_COLUMNS}
            FROM catalogs
            WHERE id = $1
            """,
            catalog_id,
        )

    async def find_by_name(self, name: str) -> dict[str, Any] | None:
        return await db.fetch_one(
            f"""
            SELECT {CATALOG_COLUMNS}
            FROM catalogs
            WHERE name = $1
            """,
            name,
        )

    async def create(self, *, name: str, description: str | None = None) -> dict[str, Any]:
        try:
            row = await db.fetch_one(
                f"""
                INSERT INTO catalogs (name, description)
                VALUES ($1, $2)
                RETURNING {CATALOG_COLUMNS}
                """,
                name,
                description,
            )
        except asyncpg.UniqueViolationError as exc:
            # Lost the check-then-write race to a concurrent insert.
            raise ConflictError(f'Catalog with name "{name}" already exists') from exc
        if row is None:
            raise RuntimeError("Failed to create catalog.")
        return row

    async def update(self, catalog_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
        columns = [c for c in UPDATABLE_COLUMNS if c in fields]
        assignments = [f"{c} = ${i}" for i, c in enumerate(columns, start=2)]
        assignments.append("updated_at = now()")

        try:
            return await db.fetch_one(
                f"""
                UPDATE catalogs
                SET {", ".join(assignments)}
                WHERE id = $1
                RETURNING {CATALOG_COLUMNS}
                """,
                catalog_id,
                *(fields[c] for c in columns),
            )
        except asyncpg.UniqueViolationError as exc:
            raise ConflictError(f'Catalog with name "{fields.get("name")}" already exists') from exc

    async def delete(self, catalog_id: int) -> bool:
        status = await db.execute(
            """
            DELETE FROM catalogs
            WHERE id = $1
            """,
            catalog_id,
        )
        return db.affected_rows(status) > 0
