"""
library_service/app/main.py

Servicio de Biblioteca (FastAPI): autores y sus libros.

Endpoints clave:
- /api/authors   -> CRUD de autores (ver app/routers/authors.py)
- /api/books     -> CRUD de libros (ver app/routers/books.py)
- GET /health    -> healthcheck con verificación DB
- GET /metrics   -> métricas Prometheus
"""

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import LOG_LEVEL
from app.database import engine, Base
from app.responses import GENERIC_ERROR_MESSAGE
from app.routers import authors, books
from app import models  # noqa: F401  (registra las tablas en Base.metadata)

logger = logging.getLogger("app")
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)

try:
    # checkfirst=True es el comportamiento por defecto,
    # pero el try/except captura el choque de concurrencia
    Base.metadata.create_all(bind=engine)
    logger.info("Tablas verificadas/creadas correctamente.")
except SQLAlchemyError as e:
    # Si hay un error de "Duplicate Object" o similar,
    # lo ignoramos porque significa que las tablas ya están ahí
    logger.warning(f"Aviso en DB: Las tablas ya existen o están siendo creadas: {e}")

app = FastAPI(
    title="Servicio de Biblioteca",
    description="Servicio encargado de la gestión de autores y sus libros",
    version="1.0.0",
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"]
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"]
)


def _route_path(request: Request) -> str:
    # Plantilla de la ruta (/api/authors/{author_id}) para no crear una serie por id
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id", str(uuid4()))
    start = time.time()

    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception(
            "request_id=%s method=%s path=%s error=%s",
            request_id, request.method, request.url.path, str(exc)
        )
        raise

    duration_ms = int((time.time() - start) * 1000)
    logger.info(
        "request_id=%s method=%s path=%s status=%s duration_ms=%s",
        request_id, request.method, request.url.path, response.status_code, duration_ms
    )
    path = _route_path(request)
    REQUEST_COUNT.labels(request.method, path, str(response.status_code)).inc()
    REQUEST_LATENCY.labels(request.method, path).observe((time.time() - start))

    response.headers["X-Request-Id"] = request_id
    return response


# ---------------------------------------------------------------------
# Errores globales
# ---------------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Body o parámetros que no cumplen el esquema -> 400 con el detalle por campo."""
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    errors = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body") or "body"
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    """Lo que escape de un handler (p.ej. en una dependencia) nunca se filtra al cliente."""
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_ERROR_MESSAGE},
    )


@app.get("/metrics", include_in_schema=False)
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ---------------------------------------------------------------------
# Endpoints principales
# ---------------------------------------------------------------------

app.include_router(authors.router)
app.include_router(books.router)


@app.get("/api/home")
def home():
    return ["ok"]


@app.get("/api/api")
def api_values():
    logger.info("Request to Get() on /api/api.")
    return ["ok"]


# ---------------------------------------------------------------------
# Utilidad / Observabilidad básica
# ---------------------------------------------------------------------

@app.get("/")
def read_root():
    return {
        "service": "Library Service",
        "status": "Online",
        "message": "Bienvenido al sistema de gestión de autores y libros",
    }


@app.get("/health")
def health_check():
    """
    Healthcheck simple:
    - Devuelve healthy si puede abrir una conexión y ejecutar SELECT 1.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}
