# app/modules/products/schemas.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from decimal import Decimal, ROUND_HALF_UP

from app.shared.database.models import MAX_PRICE, MAX_QUANTITY

CENT = Decimal("0.01")


def _to_cents(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is None:
        return v
    return v.quantize(CENT, rounding=ROUND_HALF_UP)


def _not_blank(v: Optional[str], field: str) -> Optional[str]:
    if v is None:
        return v
    if not v.strip():
        raise ValueError(f'{field} cannot be empty')
    return v.strip()


class ProductCreate(BaseModel):
    """Schema para crear un producto del catálogo"""
    id: Optional[str] = Field(None, max_length=64, description="ID opcional; se genera si no se envía")
    name: str = Field(..., max_length=255, description="Nombre del producto")
    description: Optional[str] = Field(None, description="Descripción")
    category: str = Field(..., max_length=255, description="Categoría")
    price: Decimal = Field(..., ge=0, le=MAX_PRICE, description="Precio unitario")
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY, description="Stock inicial")

    @field_validator('id')
    @classmethod
    def validate_id(cls, v):
        return _not_blank(v, 'id')

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _not_blank(v, 'name')

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _not_blank(v, 'category')

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        return _to_cents(v)


class ProductUpdate(BaseModel):
    """Schema para actualizar un producto; los campos omitidos no cambian"""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE)
    quantity: Optional[int] = Field(None, ge=0, le=MAX_QUANTITY)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _not_blank(v, 'name')

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _not_blank(v, 'category')

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        return _to_cents(v)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    category: str
    price: float
    quantity: int
