"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Product + filtros de listado)

Responsabilidades:
    - Definir la entidad Product y su único flag de ciclo de vida (is_deleted).
    - Definir el filtro/orden de listado (ProductFilter).
    - Reglas puras de validación de campos (nombre, precio, partial update).

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases/products: construyen/consumen estas entidades.
    - interfaces/api: serializan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Estados posibles: {active, deleted}. No existe hard delete.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping
from uuid import UUID

MAX_PRODUCT_NAME_CHARS = 100
MAX_PRODUCT_DESCRIPTION_CHARS = 5_000
MAX_IMAGE_URL_CHARS = 2_048

# R: numeric(12, 2) en Postgres.
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("9999999999.99")

# Campos que un partial update reconoce (y en este orden se describen).
UPDATABLE_FIELDS: tuple[str, ...] = ("name", "price", "description", "image_url")

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    """Fecha/hora UTC (helper de dominio)."""
    return datetime.now(timezone.utc)


def next_updated_at(previous: datetime | None, now: datetime | None = None) -> datetime:
    """
    Timestamp para una mutación: nunca menor ni igual al anterior.

    Dos mutaciones dentro del mismo tick de reloj quedan separadas por 1µs.
    """
    current = now or utcnow()
    if previous is not None and current <= previous:
        return previous + _TICK
    return current


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Product:
    """
    Producto del catálogo.

    Invariantes:
      - created_by se fija al crear y no cambia nunca.
      - is_deleted solo cambia vía delete/restore.
    """

    id: UUID
    name: str
    price: Decimal
    created_by: UUID
    description: str | None = None
    image_url: str | None = None
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductSortField(str, Enum):
    NAME = "name"
    PRICE = "price"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class ProductFilter:
    """
    Filtro de listado ya resuelto.

    deleted_only:
      - False -> solo activos
      - True  -> solo eliminados (vista admin con includeDeleted)
    """

    search: str | None = None
    sort_by: ProductSortField = ProductSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    deleted_only: bool = False

    @property
    def search_term(self) -> str | None:
        term = (self.search or "").strip()
        return term or None


# ---------------------------------------------------------------------------
# Reglas de validación (puras)
# ---------------------------------------------------------------------------


def normalize_name(raw: Any) -> str | None:
    """Devuelve el nombre normalizado o None si no es válido."""
    if not isinstance(raw, str):
        return None
    name = raw.strip()
    if not name or len(name) > MAX_PRODUCT_NAME_CHARS:
        return None
    return name


def _parse_price(raw: Any) -> Decimal | None:
    # R: bool no es un precio aunque sea subclase de int.
    if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal, str)):
        return None
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    try:
        return value.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # R: más dígitos que la precisión del contexto -> muy por encima de MAX_PRICE.
        return value


def normalize_price(raw: Any) -> Decimal | None:
    """Precio finito, > 0 y <= MAX_PRICE, redondeado a centavos."""
    value = _parse_price(raw)
    if value is None or value <= 0 or value > MAX_PRICE:
        return None
    return value


def price_exceeds_max(raw: Any) -> bool:
    """True si raw es un número válido pero no entra en numeric(12, 2)."""
    value = _parse_price(raw)
    return value is not None and value > MAX_PRICE


def normalize_optional_text(raw: Any, *, max_chars: int) -> tuple[bool, str | None]:
    """
    (ok, valor) para description / image_url.

    None o "" (tras strip) limpian el campo.
    """
    if raw is None:
        return True, None
    if not isinstance(raw, str):
        return False, None
    value = raw.strip()
    if len(value) > max_chars:
        return False, None
    return True, value or None


def recognized_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Filtra un partial update a los campos editables (orden estable)."""
    return {field: changes[field] for field in UPDATABLE_FIELDS if field in changes}
