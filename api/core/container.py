"""
Object wiring for the app.

Both repository ports are built before either service, so each service can
receive the other aggregate's port without the services depending on each
other.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from auth.access import AccessControl
from catalogs.repository import PostgresCatalogRepository
from catalogs.service import CatalogService
from products.repository import PostgresProductRepository
from products.service import ProductService

from .config import Settings
from .memory import MemoryCatalogRepository, MemoryProductRepository, MemoryStore


@dataclass
class Container:
    access_control: AccessControl
    catalog_service: CatalogService
    product_service: ProductService


def build_container(settings: Settings) -> Container:
    if settings.storage_backend == "memory":
        store = MemoryStore()
        catalog_repo = MemoryCatalogRepository(store)
        product_repo = MemoryProductRepository(store)
    else:
        catalog_repo = PostgresCatalogRepository()
        product_repo = PostgresProductRepository()

    return Container(
        access_control=AccessControl(settings.auth),
        catalog_service=CatalogService(catalog_repo, product_repo),
        product_service=ProductService(product_repo, catalog_repo),
    )


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.container.catalog_service


def get_product_service(request: Request) -> ProductService:
    return request.app.state.container.product_service
