# app/api/router.py
from fastapi import APIRouter
from app.modules.products.router import router as products_router
from app.modules.sales.router import router as sales_router


# Router principal de la API
api_router = APIRouter()

api_router.include_router(
    products_router,
    prefix="/products",
    tags=["Products"]
)

api_router.include_router(
    sales_router,
    prefix="/sales",
    tags=["Sales"]
)

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "POS Backend API",
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "products": "/api/products",
            "sales": "/api/sales"
        }
    }
