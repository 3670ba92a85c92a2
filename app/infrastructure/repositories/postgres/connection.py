"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/connection.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
  - Resolver la conexión a usar: la de una transacción abierta (unit of work)
    o una prestada del pool global.
  - Centralizar fetchone/fetchall con logging + DatabaseError.

Collaborators:
  - psycopg_pool.ConnectionPool / psycopg.Connection
  - infrastructure.db.pool.get_pool
  - crosscutting.exceptions.DatabaseError
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from psycopg import Connection
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger


class PostgresRepositoryBase:
    """R: Pool inyectable para tests; conexión inyectable para transacciones."""

    def __init__(
        self,
        pool: Optional[ConnectionPool] = None,
        *,
        connection: Optional[Connection] = None,
    ):
        self._pool = pool
        self._conn = connection

    def _get_pool(self) -> ConnectionPool:
        # R: Lazy-load para no acoplarse fuerte en import-time.
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        if self._conn is not None:
            # R: dentro de un unit of work; commit/rollback lo decide el dueño.
            yield self._conn
            return
        with self._get_pool().connection() as conn:
            yield conn

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            with self._connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc
