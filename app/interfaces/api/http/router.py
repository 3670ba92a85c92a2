"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por bounded context (products / audit).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición sin side-effects.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por feature)

Notas:
  - Este router se incluye desde app/api/main.py con prefix="/api".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.audit import router as audit_router
from .routers.products import router as products_router


def build_router() -> APIRouter:
    """Construye el router del catálogo (core primero, admin al final)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(products_router)
    api_router.include_router(audit_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
