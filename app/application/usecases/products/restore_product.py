"""
===============================================================================
USE CASE: Restore Product
===============================================================================

Class:
    RestoreProductUseCase

Responsibilities:
    - Transición deleted -> active como compare-and-swap
      (UPDATE ... WHERE id = ? AND is_deleted = TRUE).
    - Sin filas afectadas: NOT_FOUND o NOT_DELETED, cero writes.
    - Con éxito: UNA entrada "restore" en la misma transacción.

Collaborators:
    - CatalogUnitOfWork.transaction() -> products / audit_logs
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.audit import RESTORED_DETAILS, AuditAction, AuditLogEntry
from ....domain.product_policy import ProductActor, can_manage_products
from ....domain.repositories import CatalogUnitOfWork
from .product_results import (
    ADMIN_REQUIRED,
    PRODUCT_NOT_DELETED,
    PRODUCT_NOT_FOUND,
    ProductErrorCode,
    ProductMutationResult,
    product_error,
)


class RestoreProductUseCase:
    """Use Case (Command): restore + auditoría "restore"."""

    def __init__(self, unit_of_work: CatalogUnitOfWork) -> None:
        self._uow = unit_of_work

    def execute(
        self, product_id: UUID, actor: ProductActor | None
    ) -> ProductMutationResult:
        if not can_manage_products(actor):
            return self._error(ProductErrorCode.FORBIDDEN, ADMIN_REQUIRED)

        with self._uow.transaction() as tx:
            restored = tx.products.set_deleted(product_id, is_deleted=False)
            if restored is None:
                if tx.products.get_product(product_id) is None:
                    return self._error(ProductErrorCode.NOT_FOUND, PRODUCT_NOT_FOUND)
                return self._error(ProductErrorCode.NOT_DELETED, PRODUCT_NOT_DELETED)

            entry = tx.audit_logs.record(
                AuditLogEntry(
                    action=AuditAction.RESTORE,
                    actor_email=actor.email,
                    product_id=restored.id,
                    product_name=restored.name,
                    details=RESTORED_DETAILS,
                )
            )

        logger.info(
            "Product restored",
            extra={
                "product_id": str(product_id),
                "actor": actor.email,
                "audit_id": entry.id,
            },
        )
        return ProductMutationResult(product=restored, audit_entry=entry)

    @staticmethod
    def _error(code: ProductErrorCode, message: str) -> ProductMutationResult:
        return ProductMutationResult(error=product_error(code, message))
