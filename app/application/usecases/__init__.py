"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature.

Structure
---------
usecases/
├── products/       # Product lifecycle (create/update/delete/restore) + queries
└── audit/          # Audit trail listing

Usage
-----
Import from subpackages for clarity:

    from app.application.usecases.products import CreateProductUseCase
    from app.application.usecases.audit import ListAuditLogsUseCase
"""

from .audit import AuditLogPageResult, ListAuditLogsUseCase
from .products import (
    CreateProductInput,
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsQuery,
    ListProductsUseCase,
    ProductError,
    ProductErrorCode,
    ProductMutationResult,
    ProductPageResult,
    ProductResult,
    RestoreProductUseCase,
    UpdateProductUseCase,
)

__all__ = [
    "CreateProductUseCase",
    "UpdateProductUseCase",
    "DeleteProductUseCase",
    "RestoreProductUseCase",
    "GetProductUseCase",
    "ListProductsUseCase",
    "ListAuditLogsUseCase",
    "CreateProductInput",
    "ListProductsQuery",
    "ProductError",
    "ProductErrorCode",
    "ProductResult",
    "ProductMutationResult",
    "ProductPageResult",
    "AuditLogPageResult",
]
