"""
===============================================================================
USE CASE: Update Product (partial)
===============================================================================

Business Goal:
    Modificar solo los campos provistos de un producto activo y auditar el
    cambio con un resumen de qué campos cambiaron.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateProductUseCase

Responsibilities:
    - Resolver errores en orden: NOT_FOUND, INVALID_STATE, INVALID_PRICE,
      INVALID_INPUT, NO_FIELDS_TO_UPDATE.
    - Ejecutar el UPDATE condicional (solo filas activas) y auditar.

Collaborators:
    - CatalogUnitOfWork.transaction() -> products / audit_logs
    - domain.entities: normalize_* + recognized_changes
    - domain.audit.updated_details

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) Autorización.
2) Dentro de la transacción: leer el producto (NOT_FOUND / INVALID_STATE).
3) Validar cada campo provisto (cero writes si algo falla).
4) UPDATE ... WHERE id = ? AND is_deleted = FALSE.
   Si no afectó filas (delete concurrente), re-leer y reportar el error real.
5) Registrar UNA entrada "update".
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.audit import AuditAction, AuditLogEntry, updated_details
from ....domain.entities import (
    MAX_IMAGE_URL_CHARS,
    MAX_PRODUCT_DESCRIPTION_CHARS,
    MAX_PRODUCT_NAME_CHARS,
    UPDATABLE_FIELDS,
    Product,
    normalize_name,
    normalize_optional_text,
    normalize_price,
    price_exceeds_max,
    recognized_changes,
)
from ....domain.product_policy import ProductActor, can_manage_products
from ....domain.repositories import CatalogUnitOfWork, ProductRepository
from .product_results import (
    ADMIN_REQUIRED,
    CANNOT_UPDATE_DELETED,
    NO_FIELDS_TO_UPDATE,
    PRICE_MUST_BE_POSITIVE,
    PRICE_TOO_LARGE,
    PRODUCT_NOT_FOUND,
    ProductError,
    ProductErrorCode,
    ProductMutationResult,
    product_error,
)


_TEXT_LIMITS = {
    "description": MAX_PRODUCT_DESCRIPTION_CHARS,
    "image_url": MAX_IMAGE_URL_CHARS,
}


class _Rejected(Exception):
    """Aborta la transacción sin writes y transporta el error de negocio."""

    def __init__(self, error: ProductError) -> None:
        super().__init__(error.message)
        self.error = error


class UpdateProductUseCase:
    """
    Use Case (Command):
        Partial update de un producto activo + auditoría "update".
    """

    def __init__(self, unit_of_work: CatalogUnitOfWork) -> None:
        self._uow = unit_of_work

    def execute(
        self,
        product_id: UUID,
        changes: Mapping[str, Any],
        actor: ProductActor | None,
    ) -> ProductMutationResult:
        """
        changes: solo las claves que el cliente envió (None explícito en
        description/image_url limpia el campo). Claves no reconocidas se ignoran.
        """
        if not can_manage_products(actor):
            return ProductMutationResult(
                error=product_error(ProductErrorCode.FORBIDDEN, ADMIN_REQUIRED)
            )

        try:
            with self._uow.transaction() as tx:
                current = self._load_active(tx.products, product_id)
                values = self._validate(recognized_changes(changes))

                updated = tx.products.update_product(product_id, values)
                if updated is None:
                    # R: el producto cambió entre la lectura y el UPDATE.
                    self._load_active(tx.products, product_id)
                    raise _Rejected(
                        product_error(ProductErrorCode.NOT_FOUND, PRODUCT_NOT_FOUND)
                    )

                changed = self._changed_fields(current, updated, values)
                entry = tx.audit_logs.record(
                    AuditLogEntry(
                        action=AuditAction.UPDATE,
                        actor_email=actor.email,
                        product_id=updated.id,
                        product_name=updated.name,
                        details=updated_details(
                            changed,
                            new_name=updated.name if "name" in changed else None,
                        ),
                    )
                )
        except _Rejected as rejected:
            return ProductMutationResult(error=rejected.error)

        logger.info(
            "Product updated",
            extra={
                "product_id": str(product_id),
                "actor": actor.email,
                "fields": sorted(values),
                "audit_id": entry.id,
            },
        )
        return ProductMutationResult(product=updated, audit_entry=entry)

    # =========================================================================
    # Helpers privados
    # =========================================================================
    @staticmethod
    def _load_active(products: ProductRepository, product_id: UUID) -> Product:
        current = products.get_product(product_id)
        if current is None:
            raise _Rejected(product_error(ProductErrorCode.NOT_FOUND, PRODUCT_NOT_FOUND))
        if current.is_deleted:
            raise _Rejected(
                product_error(ProductErrorCode.INVALID_STATE, CANNOT_UPDATE_DELETED)
            )
        return current

    @staticmethod
    def _validate(raw: dict[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}

        if "price" in raw:
            price = normalize_price(raw["price"])
            if price is None:
                message = (
                    PRICE_TOO_LARGE
                    if price_exceeds_max(raw["price"])
                    else PRICE_MUST_BE_POSITIVE
                )
                raise _Rejected(product_error(ProductErrorCode.INVALID_PRICE, message))
            values["price"] = price

        if "name" in raw:
            name = normalize_name(raw["name"])
            if name is None:
                raise _Rejected(
                    product_error(
                        ProductErrorCode.INVALID_INPUT,
                        f"Name must be between 1 and {MAX_PRODUCT_NAME_CHARS} characters",
                    )
                )
            values["name"] = name

        for field, max_chars in _TEXT_LIMITS.items():
            if field not in raw:
                continue
            ok, value = normalize_optional_text(raw[field], max_chars=max_chars)
            if not ok:
                raise _Rejected(
                    product_error(ProductErrorCode.INVALID_INPUT, f"Invalid {field}")
                )
            values[field] = value

        if not values:
            raise _Rejected(
                product_error(ProductErrorCode.NO_FIELDS_TO_UPDATE, NO_FIELDS_TO_UPDATE)
            )
        return values

    @staticmethod
    def _changed_fields(
        before: Product, after: Product, values: Mapping[str, Any]
    ) -> list[str]:
        """Campos enviados cuyo valor efectivamente cambió (orden estable)."""
        return [
            f
            for f in UPDATABLE_FIELDS
            if f in values and getattr(before, f) != getattr(after, f)
        ]
