# app/config/settings.py
from fastapi import Request
from pydantic_settings import BaseSettings
from typing import List, Optional
import os

class Settings(BaseSettings):
    # App Info
    app_name: str = "POS Backend API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database - SQLite file por defecto, PostgreSQL en producción
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./pos.sqlite")
    database_echo: bool = False
    sqlite_busy_timeout: float = 15.0

    # Sales
    default_customer: str = "Walk-in Customer"
    seed_sample_data: bool = True

    # CORS
    frontend_url: Optional[str] = None
    allowed_origins: List[str] = [
        "https://iwb-liard.vercel.app",
        "https://iwb-server.onrender.com",
        "http://localhost:5174",
        "http://localhost:5173",
    ]

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 5000))

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins(self) -> List[str]:
        """Orígenes permitidos, incluyendo FRONTEND_URL si está definido"""
        origins = list(self.allowed_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.insert(0, self.frontend_url)
        return origins

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()


def get_settings(request: Request) -> Settings:
    """Settings de la app en curso (inyectados por create_app)"""
    return request.app.state.settings
