# app/core/exceptions.py
"""
Excepciones de dominio del punto de venta.

Las lanzan servicios y repositorios cuando se viola una regla de negocio.
Los handlers registrados en app.core.middleware las traducen a respuestas
HTTP con cuerpo {"error": ..., "error_code": ..., "details": ...}.
"""
from typing import Any, Dict, Optional


class POSError(Exception):
    """Base de la taxonomía de errores"""

    status_code: int = 500
    error_code: str = "POSError"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(POSError):
    """Campos requeridos ausentes o con formato inválido"""

    status_code = 400
    error_code = "ValidationError"


class EmptyItemList(ValidationError):
    error_code = "EmptyItemList"

    def __init__(self):
        super().__init__("Sale must contain at least one item")


class NotFound(POSError):
    status_code = 404
    error_code = "NotFound"


class ProductNotFound(NotFound):
    error_code = "ProductNotFound"

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} not found",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class SaleNotFound(NotFound):
    error_code = "SaleNotFound"

    def __init__(self, sale_id: str):
        super().__init__(f"Sale {sale_id} not found", details={"sale_id": sale_id})
        self.sale_id = sale_id


class InsufficientStock(POSError):
    """La cantidad pedida supera el stock disponible"""

    status_code = 400
    error_code = "InsufficientStock"

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_id} "
            f"(requested: {requested}, available: {available})",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class StorageFailure(POSError):
    """Error de persistencia subyacente; no se reintenta"""

    status_code = 500
    error_code = "StorageFailure"
