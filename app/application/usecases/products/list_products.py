"""
===============================================================================
USE CASE: List Products
===============================================================================

Class:
    ListProductsUseCase

Responsibilities:
    - Resolver el filtro efectivo según el viewer:
        * no-admin -> siempre solo activos (include_deleted se ignora)
        * admin + include_deleted -> SOLO eliminados (vista "papelera")
        * admin sin flag -> solo activos
    - Normalizar page/limit (page >= 1, limit en [1, 100]).
    - Devolver la página + total para calcular total_pages.

Collaborators:
    - ProductRepository.list_products / count_products
    - crosscutting.pagination.PageRequest
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.pagination import MAX_PAGE_LIMIT, PageRequest
from ....domain.entities import ProductFilter, ProductSortField, SortOrder
from ....domain.repositories import ProductRepository
from .product_results import ProductPageResult

DEFAULT_PRODUCTS_LIMIT = 10


@dataclass(frozen=True)
class ListProductsQuery:
    page: int | None = None
    limit: int | None = None
    search: str | None = None
    sort_by: ProductSortField = ProductSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    include_deleted: bool = False


class ListProductsUseCase:
    def __init__(
        self,
        product_repository: ProductRepository,
        *,
        default_limit: int = DEFAULT_PRODUCTS_LIMIT,
        max_limit: int = MAX_PAGE_LIMIT,
    ) -> None:
        self._products = product_repository
        self._default_limit = default_limit
        self._max_limit = max_limit

    def execute(
        self, query: ListProductsQuery, *, viewer_is_admin: bool
    ) -> ProductPageResult:
        window = PageRequest.clamped(
            query.page,
            query.limit,
            default_limit=self._default_limit,
            max_limit=self._max_limit,
        )
        product_filter = ProductFilter(
            search=query.search,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
            deleted_only=viewer_is_admin and query.include_deleted,
        )

        total = self._products.count_products(product_filter)
        products = (
            self._products.list_products(
                product_filter, limit=window.limit, offset=window.offset
            )
            if total > window.offset
            else []
        )
        return ProductPageResult(
            products=products, total=total, page=window.page, limit=window.limit
        )
