"""
Postgres schema bootstrap.

Statements are idempotent and run once per process on startup.
"""

from __future__ import annotations

from . import db

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS catalogs (
        id          serial PRIMARY KEY,
        name        varchar(255) NOT NULL UNIQUE,
        description text,
        created_at  timestamptz NOT NULL DEFAULT now(),
        updated_at  timestamptz NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS products (
        id             serial PRIMARY KEY,
        name           varchar(255) NOT NULL UNIQUE,
        description    text,
        price          numeric(10, 2) NOT NULL CHECK (price >= 0),
        stock_quantity integer NOT NULL DEFAULT 0 CHECK (stock_quantity >= 0),
        catalog_id     integer REFERENCES catalogs (id) ON DELETE SET NULL,
        created_at     timestamptz NOT NULL DEFAULT now(),
        updated_at     timestamptz NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS products_catalog_id_idx ON products (catalog_id)
    """,
)


async def apply_schema() -> None:
    for statement in SCHEMA_STATEMENTS:
        await db.execute(statement)
