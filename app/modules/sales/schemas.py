# app/modules/sales/schemas.py
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from decimal import Decimal
from datetime import datetime, timezone

from app.shared.database.models import MAX_PRICE, MAX_QUANTITY

class SaleItemRequest(BaseModel):
    product_id: str = Field(
        ...,
        validation_alias=AliasChoices("productId", "product_id", "id"),
        description="ID del producto (productId, product_id o id)"
    )
    name: Optional[str] = Field(None, description="Nombre al momento de la venta")
    price: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE, description="Precio unitario al momento de la venta")
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY, description="Cantidad")

    # Sin name/price se toma la foto del producto actual

    @field_validator('product_id', mode='before')
    @classmethod
    def coerce_product_id(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

class SaleCreateRequest(BaseModel):
    customer: Optional[str] = Field(None, max_length=255, description="Nombre del cliente")
    items: Optional[List[SaleItemRequest]] = Field(None, description="Items de la venta")

class SaleItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sale_id: str
    product_id: str
    name: str
    price: float
    quantity: int

class SaleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: datetime
    customer: str
    total: float
    items: List[SaleItemResponse] = []

    @field_validator('date')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite devuelve datetimes sin zona; se guardan en UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
