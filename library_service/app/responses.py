"""
Resultados comunes de los handlers (status + body).

Los errores internos nunca llegan al cliente: se registran en el
LoggerService y se responde siempre con GENERIC_ERROR_MESSAGE.
"""

from typing import Any, Dict, List, Union

from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.logger import LoggerService

GENERIC_ERROR_MESSAGE = "Something wrong happened. Contact support."


def describe_error(exc: BaseException) -> str:
    """Mensaje de la excepción más su causa interna ("<mensaje> - <causa>")."""
    inner = exc.__cause__ or exc.__context__
    return f"{exc} - {inner!r}"


def internal_error(logger: LoggerService, cause: Union[str, BaseException]) -> JSONResponse:
    message = describe_error(cause) if isinstance(cause, BaseException) else cause
    logger.log_error(message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_ERROR_MESSAGE},
    )


def bad_request(errors: Dict[str, List[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


def not_found(detail: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": detail})


def created(location: str, body: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=jsonable_encoder(body),
        headers={"Location": location},
    )


def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)
