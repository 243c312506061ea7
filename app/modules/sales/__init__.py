# app/modules/sales/__init__.py
"""
Módulo de Ventas

Este módulo maneja el registro y la consulta de ventas:
- Registro atómico de ventas (stock + venta + items)
- Consulta de ventas con sus items

Arquitectura:
- router.py: Endpoints de ventas
- service.py: Lógica de negocio de ventas
- repository.py: Transacción de venta y consultas
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]
