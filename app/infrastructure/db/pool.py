"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton de proceso)

Responsabilidades:
  - Inicializar, exponer y cerrar el pool de conexiones.
  - Configurar conexiones: statement_timeout.
  - Atar el ciclo de vida al proceso (lifespan llama init/close explícitos).

Colaboradores:
  - psycopg_pool.ConnectionPool
  - api/main.py (lifespan)
  - infrastructure/repositories/postgres/* (consumidores)

Principios:
  - Fail-fast (doble init, uso sin init)
  - Encapsulación (pool global único, detrás de get_pool())
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg import Connection
from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _build_configure(statement_timeout_ms: int):
    """Callback que el pool ejecuta al crear cada conexión."""

    def _configure_connection(conn: Connection) -> None:
        # R: guardrail contra queries colgadas.
        if statement_timeout_ms > 0:
            conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
            conn.commit()

    return _configure_connection


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int = 0,
) -> ConnectionPool:
    """Inicializa el pool (una vez por proceso)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        logger.info(
            "Initializing DB pool",
            extra={"min_size": min_size, "max_size": max_size},
        )

        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_build_configure(statement_timeout_ms),
            open=True,
        )

        logger.info("DB pool ready", extra={"min_size": min_size, "max_size": max_size})
        return _pool


def get_pool() -> ConnectionPool:
    """Retorna el pool singleton."""
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool no inicializado. Llamar init_pool() primero."
        )
    return _pool


def is_pool_initialized() -> bool:
    return _pool is not None


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Closing DB pool")
            try:
                _pool.close()
            finally:
                _pool = None
            logger.info("DB pool closed")


def reset_pool() -> None:
    """Reset para tests: olvida el pool aunque cerrarlo falle."""
    global _pool

    with _pool_lock:
        pool, _pool = _pool, None

    if pool is not None:
        try:
            pool.close()
        except Exception:
            logger.warning("Ignoring error while closing DB pool on reset", exc_info=True)


def ping() -> bool:
    """SELECT 1 contra el pool; False si no hay pool o la DB no responde."""
    if _pool is None:
        return False
    try:
        with _pool.connection(timeout=2.0) as conn:
            conn.execute("SELECT 1")
        return True
    except Exception:
        logger.warning("DB ping failed", exc_info=True)
        return False
