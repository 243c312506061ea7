# app/modules/products/__init__.py
"""
Módulo de Productos - Catálogo e inventario

- router.py: Endpoints CRUD /api/products
- service.py: Validaciones y generación de IDs
- repository.py: Acceso a datos
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ProductService
from .repository import ProductRepository

__all__ = [
    "router",
    "ProductService",
    "ProductRepository"
]
