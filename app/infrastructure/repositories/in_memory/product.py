"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/product.py
============================================================
Class: InMemoryProductRepository

Responsibilities:
  - Product Store en memoria (tests / local dev).
  - Replicar la semántica de Postgres: filtro, orden (con desempate por id),
    compare-and-swap de is_deleted y updated_at estrictamente creciente.
  - Exponer snapshot()/restore() para el unit of work in-memory.

Collaborators:
  - domain.entities.Product, ProductFilter, next_updated_at
  - domain.repositories.ProductRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: cada operación corre bajo lock (el CAS es atómico).
  - Product es inmutable: las escrituras reemplazan la instancia.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import RLock
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from ....domain.entities import (
    UPDATABLE_FIELDS,
    Product,
    ProductFilter,
    ProductSortField,
    SortOrder,
    next_updated_at,
    utcnow,
)
from ....domain.repositories import ProductRepository


def _matches(product: Product, product_filter: ProductFilter) -> bool:
    if product.is_deleted != product_filter.deleted_only:
        return False
    term = product_filter.search_term
    if not term:
        return True
    needle = term.lower()
    return needle in product.name.lower() or needle in (
        product.description or ""
    ).lower()


def _sort_key(product: Product, sort_by: ProductSortField) -> Any:
    if sort_by == ProductSortField.NAME:
        return product.name.lower()
    if sort_by == ProductSortField.PRICE:
        return product.price
    return product.created_at


class InMemoryProductRepository(ProductRepository):
    """
    Repositorio in-memory, thread-safe, para Products.

    Modelo mental:
    - _products es la "tabla" en memoria (UUID -> Product).
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._products: Dict[UUID, Product] = {}

    # =========================================================
    # Unit of work support
    # =========================================================
    def snapshot(self) -> Dict[UUID, Product]:
        with self._lock:
            return dict(self._products)

    def restore(self, state: Dict[UUID, Product]) -> None:
        with self._lock:
            self._products = dict(state)

    # =========================================================
    # Lecturas
    # =========================================================
    def get_product(self, product_id: UUID) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    def _filtered(self, product_filter: ProductFilter) -> List[Product]:
        with self._lock:
            values = list(self._products.values())

        matching = sorted(
            (p for p in values if _matches(p, product_filter)), key=lambda p: str(p.id)
        )
        # R: sort estable -> el desempate por id ASC se conserva en DESC.
        return sorted(
            matching,
            key=lambda p: _sort_key(p, product_filter.sort_by),
            reverse=product_filter.sort_order == SortOrder.DESC,
        )

    def list_products(
        self, product_filter: ProductFilter, *, limit: int, offset: int
    ) -> List[Product]:
        return self._filtered(product_filter)[offset : offset + limit]

    def count_products(self, product_filter: ProductFilter) -> int:
        return len(self._filtered(product_filter))

    # =========================================================
    # Escrituras
    # =========================================================
    def create_product(self, product: Product) -> Product:
        now = utcnow()
        stored = replace(product, is_deleted=False, created_at=now, updated_at=now)
        with self._lock:
            self._products[stored.id] = stored
        return stored

    def update_product(
        self, product_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Product]:
        values = {f: changes[f] for f in UPDATABLE_FIELDS if f in changes}
        if not values:
            return None

        with self._lock:
            current = self._products.get(product_id)
            if current is None or current.is_deleted:
                return None
            updated = replace(
                current, **values, updated_at=next_updated_at(current.updated_at)
            )
            self._products[product_id] = updated
            return updated

    def set_deleted(self, product_id: UUID, *, is_deleted: bool) -> Optional[Product]:
        with self._lock:
            current = self._products.get(product_id)
            if current is None or current.is_deleted == is_deleted:
                return None
            updated = replace(
                current,
                is_deleted=is_deleted,
                updated_at=next_updated_at(current.updated_at),
            )
            self._products[product_id] = updated
            return updated
