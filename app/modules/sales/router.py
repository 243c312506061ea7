# app/modules/sales/router.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.config.settings import Settings, get_settings
from app.shared.schemas.common import ErrorResponse
from .service import SalesService
from .schemas import SaleCreateRequest, SaleResponse

router = APIRouter()

@router.get("", response_model=List[SaleResponse])
async def list_sales(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Listar ventas con sus items, más recientes primero"""
    service = SalesService(db, settings.default_customer)
    return await service.list_sales()

@router.get(
    "/{sale_id}",
    response_model=SaleResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_sale(
    sale_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Obtener una venta con sus items"""
    service = SalesService(db, settings.default_customer)
    return await service.get_sale(sale_id)

@router.post(
    "",
    response_model=SaleResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def create_sale(
    sale: SaleCreateRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """
    Registrar una venta

    **Incluye (transacción única):**
    - Validación de stock de cada item
    - Descuento de inventario
    - Items con foto de nombre y precio
    - Total calculado por el servidor

    **Errores:**
    - 400 `EmptyItemList`: sin items
    - 404 `ProductNotFound`: producto inexistente
    - 400 `InsufficientStock`: stock insuficiente
    """
    service = SalesService(db, settings.default_customer)
    return await service.create_sale(sale)
