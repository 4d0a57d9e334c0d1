"""
Product API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth.access import Identity
from auth.dependencies import ADMIN_ONLY, ANY_ROLE, require_roles
from core.container import get_product_service
from products.service import ProductService

from . import schemas

router = APIRouter(prefix="/products")


@router.post(
    "",
    response_model=schemas.ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    request: schemas.ProductCreateRequest,
    _: Identity = Depends(require_roles(*ADMIN_ONLY)),
    service: ProductService = Depends(get_product_service),
) -> dict:
    return await service.create_product(
        request.name,
        request.price,
        stock_quantity=request.stock_quantity,
        description=request.description,
        catalog_id=request.catalog_id,
    )


@router.get("", response_model=list[schemas.ProductResponse])
async def list_products(
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: ProductService = Depends(get_product_service),
) -> list[dict]:
    return await service.list_products()


# Declared before /{product_id} so "unassigned" is not parsed as an id.
@router.get("/unassigned", response_model=list[schemas.ProductResponse])
async def list_unassigned_products(
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: ProductService = Depends(get_product_service),
) -> list[dict]:
    return await service.list_unassigned_products()


@router.get("/{product_id}", response_model=schemas.ProductResponse)
async def get_product(
    product_id: int,
    _: Identity = Depends(require_roles(*ANY_ROLE)),
    service: ProductService = Depends(get_product_service),
) -> dict:
    return await service.get_product(product_id)


@router.patch("/{product_id}", response_model=schemas.ProductResponse)
async def update_product(
    product_id: int,
    request: schemas.ProductUpdateRequest,
    _: Identity = Depends(require_roles(*ADMIN_ONLY)),
    service: ProductService = Depends(get_product_service),
) -> dict:
    return await service.update_product(product_id, request.model_dump(exclude_unset=True))


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    _: Identity = Depends(require_roles(*ADMIN_ONLY)),
    service: ProductService = Depends(get_product_service),
) -> dict:
    await service.delete_product(product_id)
    return {"ok": True, "product_id": product_id}
