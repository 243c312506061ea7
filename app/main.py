# app/main.py
from typing import Optional
from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from app.config.settings import Settings, settings as default_settings
from app.config.database import Database
from app.core.logging import setup_logging
from app.core.middleware import setup_middleware, setup_exception_handlers
from app.api.router import api_router
from app.shared.database.seed import seed_sample_products

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info(f"🚀 {settings.app_name} Starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")

    database.open()
    if settings.seed_sample_data:
        db = database.session()
        try:
            seed_sample_products(db)
        finally:
            db.close()

    yield

    # Shutdown
    logger.info(f"🛑 {settings.app_name} Shutting down...")
    database.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Crear la aplicación con su propio almacenamiento"""
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Backend de punto de venta: catálogo de productos y registro de ventas",
        docs_url="/docs",
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    # Setup middleware
    setup_middleware(app, settings)
    setup_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api")

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "message": f"🚀 {settings.app_name}",
            "version": settings.version,
            "status": "running",
            "environment": "production" if not settings.debug else "development",
            "docs": "/docs",
            "api": "/api"
        }

    # Health check
    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.version,
            "app": settings.app_name,
            "environment": "production" if not settings.debug else "development"
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug
    )
