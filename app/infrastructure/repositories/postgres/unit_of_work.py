"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/unit_of_work.py
============================================================
Class: PostgresCatalogUnitOfWork

Responsibilities:
  - Abrir UNA conexión + transacción y entregar Product Store y Audit Store
    ligados a ella.
  - Commit al salir normalmente; rollback si el bloque lanza.

Collaborators:
  - PostgresProductRepository / PostgresAuditLogRepository
  - psycopg Connection.transaction()

Notes:
  - Una mutación de producto sin su entrada de auditoría nunca queda
    persistida: ambos writes comparten transacción.
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.repositories import CatalogTransaction
from .audit_log import PostgresAuditLogRepository
from .product import PostgresProductRepository


class PostgresCatalogUnitOfWork:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    @contextmanager
    def transaction(self) -> Iterator[CatalogTransaction]:
        try:
            with self._get_pool().connection() as conn, conn.transaction():
                yield CatalogTransaction(
                    products=PostgresProductRepository(connection=conn),
                    audit_logs=PostgresAuditLogRepository(connection=conn),
                )
        except psycopg.Error as exc:
            # R: fallas al adquirir conexión o en COMMIT (los statements ya
            # vienen envueltos por los repos).
            logger.exception(
                "PostgresCatalogUnitOfWork: transaction failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(
                f"PostgresCatalogUnitOfWork: transaction failed: {exc}",
                original_error=exc,
            ) from exc
