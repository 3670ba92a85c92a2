"""
===============================================================================
TARJETA CRC — schemas/products.py
===============================================================================

Módulo:
    Schemas HTTP para Products

Responsabilidades:
    - Definir DTOs de request/response para endpoints de productos.
    - Rechazar campos desconocidos (extra="forbid") antes del caso de uso.
    - Dejar las reglas de negocio (nombre/precio) al caso de uso: acá solo
      se valida la forma (tipos, longitud máxima de transporte).

Colaboradores:
    - domain.entities (límites, Product, enums de orden)
    - crosscutting.pagination.Page
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from app.crosscutting.pagination import Page
from app.domain.entities import MAX_IMAGE_URL_CHARS, Product
from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateProductReq(BaseModel):
    """Request para crear producto."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, description="Nombre (1..100 chars)")
    price: Decimal | None = Field(default=None, description="Precio > 0")
    description: str | None = Field(default=None)
    image_url: str | None = Field(default=None, max_length=MAX_IMAGE_URL_CHARS)


class UpdateProductReq(BaseModel):
    """
    Request para actualizar producto (patch semántico sobre PUT).

    Solo los campos presentes en el body se consideran provistos
    (model_dump(exclude_unset=True)).
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None)
    price: Decimal | None = Field(default=None)
    description: str | None = Field(default=None)
    image_url: str | None = Field(default=None, max_length=MAX_IMAGE_URL_CHARS)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ProductRes(BaseModel):
    id: UUID
    name: str
    price: float
    description: str | None = None
    image_url: str | None = None
    is_deleted: bool
    created_by: UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductRes":
        return cls(
            id=product.id,
            name=product.name,
            price=float(product.price),
            description=product.description,
            image_url=product.image_url,
            is_deleted=product.is_deleted,
            created_by=product.created_by,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class CreateProductRes(BaseModel):
    id: UUID
    message: str = "Product created successfully"


class MessageRes(BaseModel):
    message: str


ProductsPageRes = Page[ProductRes]
