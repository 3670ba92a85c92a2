"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/unit_of_work.py
============================================================
Class: InMemoryCatalogUnitOfWork

Responsibilities:
  - Emular la transacción de Postgres sobre los stores in-memory:
    serializa las transacciones y, si el bloque lanza, restaura el snapshot
    de productos y auditoría tomado al entrar.

Collaborators:
  - InMemoryProductRepository / InMemoryAuditLogRepository
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Iterator

from ....domain.repositories import CatalogTransaction
from .audit_log import InMemoryAuditLogRepository
from .product import InMemoryProductRepository


class InMemoryCatalogUnitOfWork:
    def __init__(
        self,
        products: InMemoryProductRepository,
        audit_logs: InMemoryAuditLogRepository,
    ) -> None:
        self._products = products
        self._audit_logs = audit_logs
        self._lock = RLock()

    @contextmanager
    def transaction(self) -> Iterator[CatalogTransaction]:
        with self._lock:
            products_state = self._products.snapshot()
            audit_state = self._audit_logs.snapshot()
            try:
                yield CatalogTransaction(
                    products=self._products, audit_logs=self._audit_logs
                )
            except BaseException:
                self._products.restore(products_state)
                self._audit_logs.restore(audit_state)
                raise
