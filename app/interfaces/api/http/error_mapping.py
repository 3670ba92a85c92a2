"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir ProductErrorCode a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - NOT_FOUND -> 404; FORBIDDEN -> 403.
  - Transiciones inválidas y validación de negocio -> 400 con code estable.
  - Un código desconocido es un bug: 500 (nunca se filtra como 4xx).

Colaboradores:
  - application.usecases.products (ProductError / ProductErrorCode)
  - crosscutting.error_responses (bad_request, not_found, forbidden, ...)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from app.application.usecases import ProductError, ProductErrorCode
from app.crosscutting.error_responses import (
    ErrorCode,
    bad_request,
    forbidden,
    internal_error,
    not_found,
)

_BAD_REQUEST_CODES: dict[ProductErrorCode, ErrorCode] = {
    ProductErrorCode.ALREADY_DELETED: ErrorCode.ALREADY_DELETED,
    ProductErrorCode.NOT_DELETED: ErrorCode.NOT_DELETED,
    ProductErrorCode.INVALID_STATE: ErrorCode.INVALID_STATE,
    ProductErrorCode.INVALID_INPUT: ErrorCode.INVALID_INPUT,
    ProductErrorCode.INVALID_PRICE: ErrorCode.INVALID_PRICE,
    ProductErrorCode.NO_FIELDS_TO_UPDATE: ErrorCode.NO_FIELDS_TO_UPDATE,
}


def raise_product_error(error: ProductError) -> NoReturn:
    """Traduce ProductError -> HTTP (siempre lanza)."""
    if error.code == ProductErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == ProductErrorCode.FORBIDDEN:
        raise forbidden(error.message)

    http_code = _BAD_REQUEST_CODES.get(error.code)
    if http_code is not None:
        raise bad_request(http_code, error.message)

    raise internal_error()
