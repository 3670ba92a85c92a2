"""
===============================================================================
USE CASE: Delete Product (soft delete)
===============================================================================

Business Goal:
    Marcar un producto activo como eliminado (is_deleted = True) sin borrarlo,
    preservando historia y auditoría.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    DeleteProductUseCase

Responsibilities:
    - Validar autorización.
    - Ejecutar la transición active -> deleted como compare-and-swap.
    - Registrar UNA entrada "delete" en la misma transacción.

Collaborators:
    - CatalogUnitOfWork.transaction() -> products / audit_logs
        products.set_deleted(id, is_deleted=True) -> Product | None
        products.get_product(id) -> Product | None
    - product_results: ProductMutationResult / ProductErrorCode

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) UPDATE products SET is_deleted = TRUE WHERE id = ? AND is_deleted = FALSE.
2) Si no afectó filas: leer para distinguir NOT_FOUND de ALREADY_DELETED.
   Ningún write ocurrió (ni producto ni auditoría).
3) Si afectó: append de auditoría. Si el append falla, rollback de (1).

Notas:
    - Dos deletes concurrentes sobre el mismo id: solo uno gana el CAS; el
      otro recibe ALREADY_DELETED. Nunca hay dos entradas "delete" por una
      sola transición.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.audit import DELETED_DETAILS, AuditAction, AuditLogEntry
from ....domain.product_policy import ProductActor, can_manage_products
from ....domain.repositories import CatalogUnitOfWork
from .product_results import (
    ADMIN_REQUIRED,
    PRODUCT_ALREADY_DELETED,
    PRODUCT_NOT_FOUND,
    ProductErrorCode,
    ProductMutationResult,
    product_error,
)


class DeleteProductUseCase:
    """Use Case (Command): soft delete + auditoría "delete"."""

    def __init__(self, unit_of_work: CatalogUnitOfWork) -> None:
        self._uow = unit_of_work

    def execute(
        self, product_id: UUID, actor: ProductActor | None
    ) -> ProductMutationResult:
        if not can_manage_products(actor):
            return self._error(ProductErrorCode.FORBIDDEN, ADMIN_REQUIRED)

        with self._uow.transaction() as tx:
            deleted = tx.products.set_deleted(product_id, is_deleted=True)
            if deleted is None:
                existing = tx.products.get_product(product_id)
                if existing is None:
                    return self._error(ProductErrorCode.NOT_FOUND, PRODUCT_NOT_FOUND)
                return self._error(
                    ProductErrorCode.ALREADY_DELETED, PRODUCT_ALREADY_DELETED
                )

            entry = tx.audit_logs.record(
                AuditLogEntry(
                    action=AuditAction.DELETE,
                    actor_email=actor.email,
                    product_id=deleted.id,
                    product_name=deleted.name,
                    details=DELETED_DETAILS,
                )
            )

        logger.info(
            "Product soft deleted",
            extra={
                "product_id": str(product_id),
                "actor": actor.email,
                "audit_id": entry.id,
            },
        )
        return ProductMutationResult(product=deleted, audit_entry=entry)

    @staticmethod
    def _error(code: ProductErrorCode, message: str) -> ProductMutationResult:
        return ProductMutationResult(error=product_error(code, message))
