from sqlalchemy.orm import Session
from sqlalchemy import update
import logging

from app.core.exceptions import InsufficientStock, ProductNotFound
from app.shared.database.models import Product

logger = logging.getLogger(__name__)

class InventoryService:
    """Operaciones de stock que corren dentro de la transacción del llamador"""

    @staticmethod
    def lock_product(db: Session, product_id: str) -> Product:
        """
        Obtener el producto con bloqueo pesimista.

        - SELECT FOR UPDATE en motores que lo soportan (PostgreSQL)
        - populate_existing para no leer stock viejo del identity map
          (una venta puede repetir el mismo producto)

        Raises:
            ProductNotFound: si el producto no existe
        """
        product = db.query(Product).filter(
            Product.id == product_id
        ).populate_existing().with_for_update().first()

        if not product:
            raise ProductNotFound(product_id)

        return product

    @staticmethod
    def decrement_stock(db: Session, product: Product, quantity: int) -> int:
        """
        Descontar stock de un producto YA BLOQUEADO.

        El UPDATE lleva la condición quantity >= :quantity, así que el stock
        nunca queda negativo aunque otra transacción lo haya cambiado.

        Returns:
            int: stock restante

        Raises:
            InsufficientStock: si la cantidad pedida supera el stock
        """
        quantity_before = product.quantity
        if quantity_before < quantity:
            raise InsufficientStock(product.id, quantity, quantity_before)

        result = db.execute(
            update(Product)
            .where(Product.id == product.id, Product.quantity >= quantity)
            .values(quantity=Product.quantity - quantity)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount != 1:
            db.refresh(product)
            raise InsufficientStock(product.id, quantity, product.quantity)

        db.expire(product, ["quantity"])
        quantity_after = quantity_before - quantity
        logger.debug(f"Stock {product.id}: {quantity_before} -> {quantity_after}")
        return quantity_after
