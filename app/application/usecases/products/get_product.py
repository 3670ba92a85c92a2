"""
===============================================================================
USE CASE: Get Product
===============================================================================

Class:
    GetProductUseCase

Responsibilities:
    - Devolver un producto por id.
    - Ocultar productos eliminados a no-admins: responden NOT_FOUND igual que
      un id inexistente (no se filtra la existencia del registro).

Collaborators:
    - ProductRepository.get_product(id)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import ProductRepository
from .product_results import (
    PRODUCT_NOT_FOUND,
    ProductErrorCode,
    ProductResult,
    product_error,
)


class GetProductUseCase:
    def __init__(self, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self, product_id: UUID, *, viewer_is_admin: bool) -> ProductResult:
        product = self._products.get_product(product_id)
        if product is None or (product.is_deleted and not viewer_is_admin):
            return ProductResult(
                error=product_error(ProductErrorCode.NOT_FOUND, PRODUCT_NOT_FOUND)
            )
        return ProductResult(product=product)
