"""
Catalog API endpoints, including catalog membership of products.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth.access import Identity
from auth.dependencies import ADMIN_ONLY, ANY_ROLE, require_roles
from catalogs.service import CatalogService
from core.container import get_catalog_service
from products.schemas import ProductResponse

from . import schemas

router = APIRouter(prefix="/catalogs")


@router.post(
    "",
    response_model=schemas.CatalogResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_catalog(
    request: schemas.CatalogCreateRequest,
    _: Identity = Depends(require_roles(*ADMIN_ONLY)),
    service: CatalogService = Depends(get_catalog_service),
) -> dict:
    return await service.create_catalog(request.name, request.description)


@router.get("", response_model=list[schemas.CatalogResponse])
async def list_catalogs(
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: CatalogService = Depends(get_catalog_service),
) -> list[dict]:
    return await service.list_catalogs()


@router.get("/{catalog_id}", response_model=schemas.CatalogResponse)
async def get_catalog(
    catalog_id: int,
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: CatalogService = Depends(get_catalog_service),
) -> dict:
    return await service.get_catalog(catalog_id)


@router.patch("/{catalog_id}", response_model=schemas.CatalogResponse)
async def update_catalog(
    catalog_id: int,
    request: schemas.CatalogUpdateRequest,
    _: Identity = Depends(require_roles(*ADMIN_ONLY)),
    service: CatalogService = Depends(get_catalog_service),
) -> dict:
    return await service.update_catalog(catalog_id, request.model_dump(exclude_unset=True))


@router.delete("/{catalog_id}")
async def delete_catalog(
    catalog_id: int,
    _: Identity = Depends(require_roles(*ADMIN_ONLY)),
    service: CatalogService = Depends(get_catalog_service),
) -> dict:
    await service.delete_catalog(catalog_id)
    return {"ok": True, "catalog_id": catalog_id}


@router.get("/{catalog_id}/products", response_model=list[ProductResponse])
async def list_catalog_products(
    catalog_id: int,
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: CatalogService = Depends(get_catalog_service),
) -> list[dict]:
    return await service.list_products_in_catalog(catalog_id)


@router.post("/{catalog_id}/products/{product_id}", response_model=ProductResponse)
async def assign_product(
    catalog_id: int,
    product_id: int,
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: CatalogService = Depends(get_catalog_service),
) -> dict:
    return await service.assign_product_to_catalog(catalog_id, product_id)


@router.delete("/{catalog_id}/products/{product_id}", response_model=ProductResponse)
async def unassign_product(
    catalog_id: int,
    product_id: int,
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: CatalogService = Depends(get_catalog_service),
) -> dict:
    return await service.unassign_product_from_catalog(catalog_id, product_id)
