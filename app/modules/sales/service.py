# app/modules/sales/service.py
from sqlalchemy.orm import Session
from typing import List
import logging

from app.core.exceptions import EmptyItemList, SaleNotFound
from .repository import SalesRepository
from .schemas import SaleCreateRequest, SaleResponse

logger = logging.getLogger(__name__)

class SalesService:
    def __init__(self, db: Session, default_customer: str = "Walk-in Customer"):
        self.db = db
        self.repository = SalesRepository(db)
        self.default_customer = default_customer

    async def create_sale(self, sale_data: SaleCreateRequest) -> SaleResponse:
        """
        Registrar venta.

        Responsabilidades:
        - Rechazar ventas sin items
        - Resolver nombre del cliente
        - Delegar transacción al repository
        - Construir respuesta
        """
        if not sale_data.items:
            raise EmptyItemList()

        customer = (sale_data.customer or "").strip() or self.default_customer
        items = [item.model_dump() for item in sale_data.items]

        logger.info(f"Iniciando venta - Cliente: '{customer}', Items: {len(items)}")
        sale = self.repository.create_sale_atomic(items=items, customer=customer)

        return SaleResponse.model_validate(sale)

    async def list_sales(self) -> List[SaleResponse]:
        """Ventas más recientes primero, cada una con sus items"""
        sales = self.repository.get_all_sales()
        return [SaleResponse.model_validate(sale) for sale in sales]

    async def get_sale(self, sale_id: str) -> SaleResponse:
        sale = self.repository.get_sale_by_id(sale_id)
        if not sale:
            raise SaleNotFound(sale_id)
        return SaleResponse.model_validate(sale)
