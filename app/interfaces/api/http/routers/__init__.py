"""
===============================================================================
TARJETA CRC — app/interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por bounded context para ser incluidos por el
      router principal.

Collaborators:
    - routers.products
    - routers.audit

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .audit import router as audit_router
from .products import router as products_router

__all__ = [
    "audit_router",
    "products_router",
]
