# app/modules/products/router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.shared.schemas.common import ConfirmationResponse, ErrorResponse
from .service import ProductService
from .schemas import ProductCreate, ProductUpdate, ProductResponse

router = APIRouter()

@router.get("", response_model=List[ProductResponse])
async def list_products(db: Session = Depends(get_db)):
    """Listar el catálogo completo ordenado por nombre"""
    service = ProductService(db)
    return await service.list_products()

@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_product(product_id: str, db: Session = Depends(get_db)):
    """Obtener un producto por su ID"""
    service = ProductService(db)
    return await service.get_product(product_id)

@router.post(
    "",
    response_model=ProductResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}}
)
async def create_product(product: ProductCreate, db: Session = Depends(get_db)):
    """
    Crear un producto

    **Campos obligatorios:** `name`, `category`, `price` (>= 0), `quantity` (entero >= 0)

    **Opcionales:** `description`, `id` (se rechaza si ya existe)
    """
    service = ProductService(db)
    return await service.create_product(product)

@router.put(
    "/{product_id}",
    response_model=ConfirmationResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_product(product_id: str, product: ProductUpdate, db: Session = Depends(get_db)):
    """Actualizar los campos enviados de un producto"""
    service = ProductService(db)
    return await service.update_product(product_id, product)

@router.delete(
    "/{product_id}",
    response_model=ConfirmationResponse,
    responses={404: {"model": ErrorResponse}}
)
async def delete_product(product_id: str, db: Session = Depends(get_db)):
    """Eliminar un producto; las ventas históricas no se modifican"""
    service = ProductService(db)
    return await service.delete_product(product_id)
