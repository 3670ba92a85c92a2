"""
===============================================================================
USE CASE: Create Product
===============================================================================

Business Goal:
    Dar de alta un producto en el catálogo y dejar registrada exactamente una
    entrada de auditoría "create" en la misma transacción.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateProductUseCase

Responsibilities:
    - Validar autorización (solo admin muta el catálogo).
    - Validar nombre (no vacío, <= 100 chars) y precio (finito, > 0).
    - Validar campos opcionales (description / image_url).
    - Persistir producto + auditoría de forma atómica.

Collaborators:
    - CatalogUnitOfWork.transaction() -> products / audit_logs
    - product_policy.can_manage_products
    - product_results: ProductMutationResult / ProductErrorCode

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) Toda validación ocurre antes de cualquier write.
R2) created_by = actor.user_id y no cambia nunca.
R3) Un producto nuevo siempre nace activo (is_deleted = False).
R4) Si el append de auditoría falla, el INSERT hace rollback.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.audit import AuditAction, AuditLogEntry, created_details
from ....domain.entities import (
    MAX_IMAGE_URL_CHARS,
    MAX_PRODUCT_DESCRIPTION_CHARS,
    MAX_PRODUCT_NAME_CHARS,
    Product,
    normalize_name,
    normalize_optional_text,
    normalize_price,
    price_exceeds_max,
)
from ....domain.product_policy import ProductActor, can_manage_products
from ....domain.repositories import CatalogUnitOfWork
from .product_results import (
    ADMIN_REQUIRED,
    NAME_AND_PRICE_REQUIRED,
    PRICE_MUST_BE_POSITIVE,
    PRICE_TOO_LARGE,
    ProductErrorCode,
    ProductMutationResult,
    product_error,
)


@dataclass(frozen=True)
class CreateProductInput:
    """
    Input crudo (ya tipado por la capa HTTP, pero sin reglas de negocio).

    name/price son Any: el caso de uso decide qué es válido.
    """

    name: Any
    price: Any
    description: Any = None
    image_url: Any = None


class CreateProductUseCase:
    """
    Use Case (Command):
        Crea un producto activo y audita la creación.
    """

    def __init__(self, unit_of_work: CatalogUnitOfWork) -> None:
        self._uow = unit_of_work

    def execute(
        self, input_data: CreateProductInput, actor: ProductActor | None
    ) -> ProductMutationResult:
        # ---------------------------------------------------------------------
        # 1) Autorización.
        # ---------------------------------------------------------------------
        if not can_manage_products(actor):
            return self._error(ProductErrorCode.FORBIDDEN, ADMIN_REQUIRED)

        # ---------------------------------------------------------------------
        # 2) Validación (sin writes todavía).
        # ---------------------------------------------------------------------
        if self._is_blank(input_data.name) or input_data.price is None:
            return self._invalid(NAME_AND_PRICE_REQUIRED)

        name = normalize_name(input_data.name)
        if name is None:
            return self._invalid(
                f"Name must be between 1 and {MAX_PRODUCT_NAME_CHARS} characters"
            )

        price = normalize_price(input_data.price)
        if price is None:
            if price_exceeds_max(input_data.price):
                return self._invalid(PRICE_TOO_LARGE)
            return self._invalid(PRICE_MUST_BE_POSITIVE)

        ok_description, description = normalize_optional_text(
            input_data.description, max_chars=MAX_PRODUCT_DESCRIPTION_CHARS
        )
        if not ok_description:
            return self._invalid("Description is invalid")

        ok_image, image_url = normalize_optional_text(
            input_data.image_url, max_chars=MAX_IMAGE_URL_CHARS
        )
        if not ok_image:
            return self._invalid("Image URL is invalid")

        # ---------------------------------------------------------------------
        # 3) Persistir producto + auditoría (atómico).
        # ---------------------------------------------------------------------
        product = Product(
            id=uuid4(),
            name=name,
            price=price,
            description=description,
            image_url=image_url,
            created_by=actor.user_id,
        )

        with self._uow.transaction() as tx:
            created = tx.products.create_product(product)
            entry = tx.audit_logs.record(
                AuditLogEntry(
                    action=AuditAction.CREATE,
                    actor_email=actor.email,
                    product_id=created.id,
                    product_name=created.name,
                    details=created_details(created.name),
                )
            )

        logger.info(
            "Product created",
            extra={
                "product_id": str(created.id),
                "actor": actor.email,
                "audit_id": entry.id,
            },
        )
        return ProductMutationResult(product=created, audit_entry=entry)

    # =========================================================================
    # Helpers privados
    # =========================================================================
    @staticmethod
    def _is_blank(value: Any) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    @staticmethod
    def _invalid(message: str) -> ProductMutationResult:
        return ProductMutationResult(
            error=product_error(ProductErrorCode.INVALID_INPUT, message)
        )

    @staticmethod
    def _error(code: ProductErrorCode, message: str) -> ProductMutationResult:
        return ProductMutationResult(error=product_error(code, message))
