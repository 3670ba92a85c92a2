"""
===============================================================================
TARJETA CRC — app/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a respuestas HTTP RFC7807.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).
  - Observabilidad: correlación por request_id y error_id.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, problem_response
  - crosscutting.exceptions: CatalogError y derivadas (DatabaseError)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem_response,
)
from ..crosscutting.exceptions import CatalogError
from ..crosscutting.logger import logger

INTERNAL_ERROR_DETAIL = "Internal server error"


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Errores de pydantic -> [{"field": "body.price", "msg": "..."}]."""
    errors: list[dict[str, str]] = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        errors.append({"field": location, "msg": str(err.get("msg", ""))})
    return errors


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/query inválidos (tipos, campos faltantes o desconocidos) -> 400."""
    return problem_response(
        request,
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Invalid request",
        errors=_field_errors(exc),
    )


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """
    Fallas de storage / internas tipadas.

    - Log completo con error_id.
    - Respuesta opaca: el error_id permite correlacionar sin filtrar internos.
    """
    request_id = _request_id_from(request)

    logger.error(
        "Error de servicio",
        exc_info=exc,
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "request_id": request_id,
        },
    )

    return problem_response(
        request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=INTERNAL_ERROR_DETAIL,
        errors=[{"error_id": exc.error_id}],
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (nunca expone str(exc)).
    """
    logger.error(
        "Excepción no controlada",
        exc_info=exc,
        extra={"request_id": _request_id_from(request)},
    )

    return problem_response(
        request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=INTERNAL_ERROR_DETAIL,
    )


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException debe registrarse para respetar RFC7807.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers", "INTERNAL_ERROR_DETAIL"]
