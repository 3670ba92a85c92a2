"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .audit import AuditAction, AuditLogEntry
from .entities import Product, ProductFilter, ProductSortField, SortOrder
from .product_policy import ProductActor, can_manage_products
from .repositories import (
    AuditLogRepository,
    CatalogTransaction,
    CatalogUnitOfWork,
    ProductRepository,
    UserRepository,
)

__all__ = [
    # Entities
    "Product",
    "ProductFilter",
    "ProductSortField",
    "SortOrder",
    "AuditAction",
    "AuditLogEntry",
    # Policy
    "ProductActor",
    "can_manage_products",
    # Repositories
    "ProductRepository",
    "AuditLogRepository",
    "UserRepository",
    "CatalogTransaction",
    "CatalogUnitOfWork",
]
