# app/core/logging.py
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configurar root logger con salida a consola"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Evitar handlers duplicados si la app se crea varias veces (tests)
    for handler in list(root.handlers):
        if getattr(handler, "_pos_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._pos_handler = True
    root.addHandler(handler)

    # SQLAlchemy solo informa con echo activado
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
