from typing import List
from sqlalchemy.orm import Session
import logging
import uuid

from app.core.exceptions import ProductNotFound, ValidationError
from app.shared.database.models import Product
from app.shared.schemas.common import ConfirmationResponse
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate, ProductResponse

logger = logging.getLogger(__name__)

# Columnas NOT NULL que no pueden recibir null explícito en un update
REQUIRED_FIELDS = ("name", "category", "price", "quantity")

class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductRepository(db)

    async def list_products(self) -> List[ProductResponse]:
        """Catálogo completo ordenado por nombre"""
        products = self.repository.get_all_products()
        return [ProductResponse.model_validate(p) for p in products]

    async def get_product(self, product_id: str) -> ProductResponse:
        return ProductResponse.model_validate(self._get_or_404(product_id))

    async def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """
        Crear producto.

        El ID lo genera el servidor; un ID enviado por el cliente se acepta
        solo si no choca con un producto existente.
        """
        data = product_data.model_dump()

        if data.get("id"):
            if self.repository.get_product_by_id(data["id"]):
                raise ValidationError(
                    f"Product id {data['id']} already exists",
                    details={"id": data["id"]},
                )
        else:
            data["id"] = uuid.uuid4().hex

        product = self.repository.create_product(data)
        logger.info(f"Producto creado: {product.id} ({product.name})")
        return ProductResponse.model_validate(product)

    async def update_product(self, product_id: str, update_data: ProductUpdate) -> ConfirmationResponse:
        product = self._get_or_404(product_id)

        changes = update_data.model_dump(exclude_unset=True)
        null_fields = [f for f in REQUIRED_FIELDS if f in changes and changes[f] is None]
        if null_fields:
            raise ValidationError(
                f"Fields cannot be null: {', '.join(null_fields)}",
                details={"fields": null_fields},
            )

        self.repository.update_product(product, changes)
        logger.info(f"Producto actualizado: {product_id} {sorted(changes)}")
        return ConfirmationResponse(
            success=True,
            message="Product updated successfully",
            id=product_id
        )

    async def delete_product(self, product_id: str) -> ConfirmationResponse:
        product = self._get_or_404(product_id)
        self.repository.delete_product(product)
        logger.info(f"Producto eliminado: {product_id}")
        return ConfirmationResponse(
            success=True,
            message="Product deleted successfully",
            id=product_id
        )

    def _get_or_404(self, product_id: str) -> Product:
        product = self.repository.get_product_by_id(product_id)
        if not product:
            raise ProductNotFound(product_id)
        return product
