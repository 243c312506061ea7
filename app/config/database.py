# app/config/database.py
from contextlib import nullcontext
from typing import Iterator, Optional
import logging
import threading

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .settings import Settings
from app.shared.database.models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Almacenamiento inyectado con ciclo de vida explícito.

    - open(): crea engine, session factory y tablas (startup)
    - close(): libera el pool de conexiones (shutdown)

    Cada instancia es independiente, lo que permite una base limpia por test.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None
        # SQLite ignora SELECT FOR UPDATE: las escrituras se serializan aquí
        self.write_lock = threading.Lock() if settings.is_sqlite else None

    def open(self) -> "Database":
        if self.engine is not None:
            return self

        engine_kwargs = {
            "pool_pre_ping": True,
            "echo": self.settings.database_echo,
        }

        if self.settings.is_sqlite:
            # Varios hilos del servidor comparten el pool; el timeout hace que
            # un escritor concurrente espere el lock en vez de fallar
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": self.settings.sqlite_busy_timeout,
            }
        else:
            engine_kwargs["pool_recycle"] = 300

        self.engine = create_engine(self.settings.database_url, **engine_kwargs)

        if self.settings.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
            info={"write_lock": self.write_lock},
        )

        Base.metadata.create_all(bind=self.engine)
        logger.info("Base de datos abierta")
        return self

    def close(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self.SessionLocal = None
        logger.info("Base de datos cerrada")

    def session(self) -> Session:
        if self.SessionLocal is None:
            raise RuntimeError("Database is not open")
        return self.SessionLocal()


def write_lock(db: Session):
    """Lock de escritura de la sesión (nullcontext si el motor bloquea filas)"""
    return db.info.get("write_lock") or nullcontext()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


# Database dependency
def get_db(request: Request) -> Iterator[Session]:
    """Database dependency for FastAPI"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
