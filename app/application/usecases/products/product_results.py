"""
===============================================================================
PRODUCT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Product Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    del catálogo, con un contrato estable para:
      - validaciones de input (nombre / precio / campos)
      - transiciones inválidas del ciclo de vida (active <-> deleted)
      - recursos no encontrados
      - autorización

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      "hacia afuera"; la capa HTTP mapea cada código a un status.
    - Las fallas de storage NO son resultados: se propagan como DatabaseError.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    product_results models (module)

Responsibilities:
    - Definir ProductErrorCode (categorías estables).
    - Representar ProductError (code + message).
    - Representar resultados: ProductResult, ProductPageResult,
      ProductMutationResult.
    - Centralizar los mensajes estables que ve el cliente.

Collaborators:
    - domain.entities.Product
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.audit import AuditLogEntry
from ....domain.entities import Product


class ProductErrorCode(str, Enum):
    """
    Códigos de error de los casos de uso de Products.

    Códigos:
      - NOT_FOUND: producto inexistente (o eliminado, para no-admins).
      - ALREADY_DELETED: delete sobre un producto ya eliminado.
      - NOT_DELETED: restore sobre un producto activo.
      - INVALID_STATE: update sobre un producto eliminado.
      - INVALID_INPUT: nombre/precio faltantes o malformados.
      - INVALID_PRICE: precio provisto <= 0 (o no finito) en un update.
      - NO_FIELDS_TO_UPDATE: partial update sin campos reconocidos.
      - FORBIDDEN: el actor no puede mutar el catálogo.
    """

    NOT_FOUND = "NOT_FOUND"
    ALREADY_DELETED = "ALREADY_DELETED"
    NOT_DELETED = "NOT_DELETED"
    INVALID_STATE = "INVALID_STATE"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_PRICE = "INVALID_PRICE"
    NO_FIELDS_TO_UPDATE = "NO_FIELDS_TO_UPDATE"
    FORBIDDEN = "FORBIDDEN"


# Mensajes estables (el cliente web los muestra tal cual).
PRODUCT_NOT_FOUND = "Product not found"
PRODUCT_ALREADY_DELETED = "Product is already deleted"
PRODUCT_NOT_DELETED = "Product is not deleted"
CANNOT_UPDATE_DELETED = "Cannot update deleted product"
NAME_AND_PRICE_REQUIRED = "Name and price are required"
PRICE_MUST_BE_POSITIVE = "Price must be greater than 0"
PRICE_TOO_LARGE = "Price must not exceed 9999999999.99"
NO_FIELDS_TO_UPDATE = "No fields to update"
ADMIN_REQUIRED = "Admin role required"


@dataclass(frozen=True)
class ProductError:
    """Error de caso de uso: categoría estable + mensaje humano."""

    code: ProductErrorCode
    message: str


@dataclass
class ProductResult:
    """
    Resultado para casos de uso que retornan un único Product.

    Contrato:
      - error is None => product presente (éxito)
      - error != None => product None (fallo, cero writes)
    """

    product: Product | None = None
    error: ProductError | None = None


@dataclass
class ProductMutationResult:
    """
    Resultado de create/update/delete/restore.

    audit_entry es la única entrada que se registró junto con la mutación.
    """

    product: Product | None = None
    audit_entry: AuditLogEntry | None = None
    error: ProductError | None = None


@dataclass
class ProductPageResult:
    """Página de productos + total que matchea el filtro."""

    products: List[Product] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    error: ProductError | None = None


def product_error(code: ProductErrorCode, message: str) -> ProductError:
    return ProductError(code=code, message=message)
