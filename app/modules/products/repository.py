from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Any, Dict, List, Optional
import logging

from app.config.database import write_lock
from app.core.exceptions import StorageFailure, ValidationError
from app.shared.database.models import Product

logger = logging.getLogger(__name__)

class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all_products(self) -> List[Product]:
        """Obtener todos los productos ordenados por nombre"""
        try:
            return self.db.query(Product).order_by(Product.name.asc(), Product.id.asc()).all()
        except SQLAlchemyError as e:
            logger.exception("Error listando productos")
            raise StorageFailure(f"Error listing products: {e}")

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Obtener un producto por ID"""
        try:
            return self.db.query(Product).filter(Product.id == product_id).first()
        except SQLAlchemyError as e:
            logger.exception(f"Error obteniendo producto {product_id}")
            raise StorageFailure(f"Error loading product {product_id}: {e}")

    def create_product(self, product_data: Dict[str, Any]) -> Product:
        """Crear un nuevo producto"""
        product = Product(**product_data)
        try:
            with write_lock(self.db):
                self.db.add(product)
                self.db.commit()
            self.db.refresh(product)
            return product
        except IntegrityError as e:
            self.db.rollback()
            # Solo un choque de clave primaria es un ID duplicado; el resto
            # son restricciones CHECK / NOT NULL
            if self.get_product_by_id(product_data['id']) is not None:
                raise ValidationError(
                    f"Product id {product_data['id']} already exists",
                    details={"id": product_data['id']},
                )
            logger.warning(f"Producto rechazado por restricción: {e.orig}")
            raise ValidationError(
                "Product violates a data constraint",
                details={"constraint": str(e.orig)},
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Error creando producto")
            raise StorageFailure(f"Error creating product: {e}")

    def update_product(self, product: Product, update_data: Dict[str, Any]) -> Product:
        """Actualizar los campos enviados de un producto"""
        try:
            for key, value in update_data.items():
                setattr(product, key, value)
            with write_lock(self.db):
                self.db.commit()
            self.db.refresh(product)
            return product
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error actualizando producto {product.id}")
            raise StorageFailure(f"Error updating product {product.id}: {e}")

    def delete_product(self, product: Product) -> None:
        """Eliminar permanentemente un producto"""
        try:
            self.db.delete(product)
            with write_lock(self.db):
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Error eliminando producto {product.id}")
            raise StorageFailure(f"Error deleting product {product.id}: {e}")
