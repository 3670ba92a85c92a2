"""
===============================================================================
MÓDULO: Utilidades de paginación (page / limit / offset)
===============================================================================

Objetivo
--------
Paginación simple y consistente para endpoints listados:
- page 1-indexed + limit acotado
- response genérico Page[T] = {data, pagination}

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PageRequest + Pagination + Page[T]

Responsabilidades:
  - Normalizar page/limit (clamp) y calcular offset
  - Calcular total_pages = ceil(total / limit)
  - Serializar metadata con las claves que consume el cliente web
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

MAX_PAGE_LIMIT = 100


def total_pages_for(total: int, limit: int) -> int:
    """ceil(total / limit) sin floats; total=0 -> 0 páginas."""
    if total <= 0:
        return 0
    return -(-total // max(1, limit))


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Ventana pedida por el cliente, ya normalizada."""

    page: int
    limit: int

    @classmethod
    def clamped(
        cls, page: int | None, limit: int | None, *, default_limit: int, max_limit: int = MAX_PAGE_LIMIT
    ) -> "PageRequest":
        # R: page < 1 -> 1; limit fuera de [1, max_limit] -> borde más cercano.
        safe_page = max(1, int(page or 1))
        raw_limit = default_limit if limit is None else int(limit)
        safe_limit = min(max(1, raw_limit), max_limit)
        return cls(page=safe_page, limit=safe_limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(description="Página actual (1-indexed)")
    limit: int = Field(description="Items por página")
    total: int = Field(description="Total de items que matchean el filtro")
    total_pages: int = Field(
        alias="totalPages", description="ceil(total / limit)"
    )

    @classmethod
    def build(cls, request: PageRequest, total: int) -> "Pagination":
        return cls(
            page=request.page,
            limit=request.limit,
            total=total,
            total_pages=total_pages_for(total, request.limit),
        )


class Page(BaseModel, Generic[T]):
    data: List[T] = Field(description="Items de la página actual")
    pagination: Pagination = Field(description="Metadatos de paginación")
