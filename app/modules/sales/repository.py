from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func
from typing import Dict, Any, List, Optional
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
import logging
import uuid

from app.config.database import write_lock
from app.core.exceptions import POSError, StorageFailure, ValidationError
from app.shared.database.models import MAX_TOTAL, Sale, SaleItem
from app.shared.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

class SalesRepository:
    def __init__(self, db: Session):
        self.db = db
        self.inventory_service = InventoryService()

    def create_sale_atomic(self, items: List[Dict[str, Any]], customer: str) -> Sale:
        """
        Crear venta con actualización de inventario en transacción atómica.

        Proceso:
        1. ID y fecha de la venta (la fecha se captura una sola vez)
        2. Por cada item, en el orden recibido:
           a. Bloquear producto (SELECT FOR UPDATE)
           b. Validar stock
           c. Descontar stock (UPDATE condicionado)
           d. Guardar foto del item (name/price del request)
        3. Total = suma de price * quantity con los precios de la foto
        4. Crear Sale
        5. Commit único; cualquier error hace rollback completo

        Returns:
            Sale: Venta creada con sus items en orden

        Raises:
            ProductNotFound: si un producto no existe
            InsufficientStock: si un item supera el stock
            StorageFailure: si falla la base de datos
        """
        with write_lock(self.db):
            return self._create_sale(items, customer)

    def _create_sale(self, items: List[Dict[str, Any]], customer: str) -> Sale:
        try:
            # PASO 1: ID Y FECHA
            sale = Sale(
                id=uuid.uuid4().hex,
                date=self._next_sale_date(),
                customer=customer
            )
            logger.info(f"Registrando venta {sale.id} con {len(items)} items")

            # PASO 2: RESERVAR, DESCONTAR Y GUARDAR FOTO DE CADA ITEM
            total = Decimal("0")
            for item in items:
                product = self.inventory_service.lock_product(self.db, item['product_id'])
                remaining = self.inventory_service.decrement_stock(
                    self.db, product, item['quantity']
                )

                name = item.get('name') or product.name
                raw_price = item.get('price')
                price = Decimal(str(raw_price if raw_price is not None else product.price))
                price = price.quantize(CENT, rounding=ROUND_HALF_UP)

                sale_item = SaleItem(
                    product_id=product.id,
                    name=name,
                    price=price,
                    quantity=item['quantity']
                )
                sale.items.append(sale_item)

                # PASO 3: TOTAL
                total += sale_item.subtotal
                logger.info(
                    f"Item {product.id} x{item['quantity']} reservado (stock restante: {remaining})"
                )

            if total > MAX_TOTAL:
                raise ValidationError(
                    f"Sale total {total} exceeds the maximum of {MAX_TOTAL}",
                    details={"total": str(total), "max_total": str(MAX_TOTAL)},
                )

            # PASO 4: CREAR VENTA
            sale.total = total
            self.db.add(sale)
            self.db.flush()

            # PASO 5: COMMIT ÚNICO
            self.db.commit()
            logger.info(f"Transacción completada - Venta #{sale.id} total {total}")

            return sale

        except POSError as e:
            logger.warning(f"Venta cancelada: {e.message}")
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            logger.exception("Error en transacción de venta")
            self.db.rollback()
            raise StorageFailure(f"Error recording sale: {e}")
        except Exception as e:
            logger.exception("Error inesperado en transacción de venta")
            self.db.rollback()
            raise StorageFailure(f"Error recording sale: {e}")

    def get_all_sales(self) -> List[Sale]:
        """
        Obtener todas las ventas, más recientes primero.

        Optimización: items cargados con selectinload (una query extra, no N)
        """
        try:
            return self.db.query(Sale).options(
                selectinload(Sale.items)
            ).order_by(Sale.date.desc(), Sale.id.desc()).all()
        except SQLAlchemyError as e:
            logger.exception("Error listando ventas")
            raise StorageFailure(f"Error listing sales: {e}")

    def get_sale_by_id(self, sale_id: str) -> Optional[Sale]:
        """Obtener una venta con sus items"""
        try:
            return self.db.query(Sale).options(
                selectinload(Sale.items)
            ).filter(Sale.id == sale_id).first()
        except SQLAlchemyError as e:
            logger.exception(f"Error obteniendo venta {sale_id}")
            raise StorageFailure(f"Error loading sale {sale_id}: {e}")

    def _next_sale_date(self) -> datetime:
        """
        Fecha de creación de la venta.

        Nunca es anterior a la última venta guardada, así el orden por fecha
        coincide con el orden de inserción aunque el reloj retroceda.
        """
        now = datetime.now(timezone.utc)
        latest = self.db.query(func.max(Sale.date)).scalar()

        if latest is None:
            return now
        if latest.tzinfo is None:
            latest = latest.replace(tzinfo=timezone.utc)
        if now <= latest:
            return latest + timedelta(microseconds=1)
        return now
