"""
===============================================================================
MÓDULO: Security headers (OWASP hardening)
===============================================================================

Objetivo
--------
Agregar headers de seguridad a todas las respuestas de la API JSON:
- anti-sniffing / anti-clickjacking
- CSP estricta (la API no sirve HTML, salvo /docs)
- HSTS en producción detrás de HTTPS

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  SecurityHeadersMiddleware

Responsabilidades:
  - Añadir headers de hardening sin romper Swagger UI en dev

Colaboradores:
  - crosscutting.config.get_settings
===============================================================================
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Swagger/ReDoc cargan assets de CDN: no les aplicamos la CSP estricta.
_DOCS_PREFIXES = ("/docs", "/redoc", "/openapi.json")

_API_CSP = "default-src 'none'; frame-ancestors 'none'"

_STATIC_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Permissions-Policy": "camera=(), geolocation=(), microphone=(), payment=()",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Agrega headers OWASP; HSTS solo si producción y request por HTTPS."""

    def __init__(self, app):
        super().__init__(app)
        from .config import get_settings

        self._is_production = get_settings().is_production()

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for name, value in _STATIC_HEADERS.items():
            response.headers.setdefault(name, value)

        if not request.url.path.startswith(_DOCS_PREFIXES):
            response.headers["Content-Security-Policy"] = _API_CSP

        if self._is_production:
            proto = (
                request.headers.get("x-forwarded-proto") or request.url.scheme or ""
            ).lower()
            if proto == "https":
                response.headers["Strict-Transport-Security"] = (
                    "max-age=31536000; includeSubDomains"
                )

        return response
