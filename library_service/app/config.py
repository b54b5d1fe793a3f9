"""
library_service/app/config.py

Configuración del servicio leída de variables de entorno.

- DATABASE_URL: cadena de conexión SQLAlchemy. En Docker apunta a PostgreSQL
  (postgresql+psycopg2://...); por defecto usa un SQLite local.
- LOG_LEVEL:    nivel del logger "app" (INFO por defecto).
- SQL_ECHO:     "true" para ver el SQL emitido por SQLAlchemy.
"""

import os


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./library.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SQL_ECHO = _as_bool(os.getenv("SQL_ECHO", "false"))
