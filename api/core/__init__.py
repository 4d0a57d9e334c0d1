"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks that both feature packages use
(DB pool, settings, error taxonomy, storage backends and wiring). Keep
entity-specific SQL and business rules in `catalogs/` and `products/`.
"""
