"""
===============================================================================
PRODUCT USE CASES PACKAGE (Public API / Exports)
===============================================================================

Name:
    Product Use Cases (package exports)

Business Goal:
    Exponer un punto único de importación para el Product Lifecycle Service:
    comandos (create / update / delete / restore), queries (get / list) y sus
    resultados tipados.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    product usecases package (__init__.py)

Responsibilities:
    - Re-exportar casos de uso, inputs y resultados.
    - Definir __all__ como contrato de API pública del paquete.
===============================================================================
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Use Cases
# -----------------------------------------------------------------------------
from .create_product import CreateProductInput, CreateProductUseCase
from .delete_product import DeleteProductUseCase
from .get_product import GetProductUseCase
from .list_products import ListProductsQuery, ListProductsUseCase
from .restore_product import RestoreProductUseCase
from .update_product import UpdateProductUseCase

# -----------------------------------------------------------------------------
# Results / Errors
# -----------------------------------------------------------------------------
from .product_results import (
    ProductError,
    ProductErrorCode,
    ProductMutationResult,
    ProductPageResult,
    ProductResult,
)

__all__ = [
    # Use cases
    "CreateProductUseCase",
    "UpdateProductUseCase",
    "DeleteProductUseCase",
    "RestoreProductUseCase",
    "GetProductUseCase",
    "ListProductsUseCase",
    # Inputs
    "CreateProductInput",
    "ListProductsQuery",
    # Results
    "ProductError",
    "ProductErrorCode",
    "ProductResult",
    "ProductMutationResult",
    "ProductPageResult",
]
