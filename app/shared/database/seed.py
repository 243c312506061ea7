# app/shared/database/seed.py
from decimal import Decimal
import logging

from sqlalchemy.orm import Session

from .models import Product

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {"id": "1", "name": "Coffee", "description": "Hot brewed coffee", "category": "Beverage", "price": Decimal("2.99"), "quantity": 50},
    {"id": "2", "name": "Sandwich", "description": "Fresh deli sandwich", "category": "Food", "price": Decimal("5.99"), "quantity": 25},
    {"id": "3", "name": "Cake", "description": "Chocolate cake slice", "category": "Dessert", "price": Decimal("3.99"), "quantity": 15},
]


def seed_sample_products(db: Session) -> int:
    """
    Insertar productos de ejemplo si el catálogo está vacío.

    Returns:
        int: cantidad de productos insertados (0 si ya había datos)
    """
    if db.query(Product).count() > 0:
        return 0

    try:
        db.add_all([Product(**data) for data in SAMPLE_PRODUCTS])
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Catálogo inicializado con {len(SAMPLE_PRODUCTS)} productos de ejemplo")
    return len(SAMPLE_PRODUCTS)
