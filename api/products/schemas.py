"""
Product API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(default=0, ge=0)
    catalog_id: int | None = Field(default=None, ge=1)


class ProductUpdateRequest(BaseModel):
    """
    Partial update. Only fields present in the body are written; send
    `"catalog_id": null` to unassign.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int | None = Field(default=None, ge=0)
    catalog_id: int | None = Field(default=None, ge=1)

    @field_validator("name", "price", "stock_quantity")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: float
    stock_quantity: int
    catalog_id: int | None = None
    created_at: datetime
    updated_at: datetime
