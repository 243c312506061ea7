#!/usr/bin/env python3
"""
Script para crear las tablas y cargar productos de ejemplo
Ejecutar desde la raíz del proyecto: python scripts/seed_products.py
"""
import os
import sys

# Agregar el directorio raíz al path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config.database import Database
from app.config.settings import settings
from app.core.logging import setup_logging
from app.shared.database.seed import seed_sample_products


def main() -> bool:
    setup_logging(settings.log_level)
    print("🚀 POS Backend - Cargando productos de ejemplo...")
    print(f"🔌 Base de datos: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")

    database = Database(settings).open()
    db = database.session()
    try:
        inserted = seed_sample_products(db)
    finally:
        db.close()
        database.close()

    if inserted:
        print(f"✅ {inserted} productos creados")
    else:
        print("ℹ️  El catálogo ya tiene productos; no se insertó nada")
    return True


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
