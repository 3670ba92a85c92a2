"""
============================================================
TARJETA CRC
============================================================
Class: app.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.
- Mantener una API estable para el composition root (container.py).

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (testing / local dev)
============================================================
"""

from .in_memory import (
    InMemoryAuditLogRepository,
    InMemoryCatalogUnitOfWork,
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresAuditLogRepository,
    PostgresCatalogUnitOfWork,
    PostgresProductRepository,
    PostgresUserRepository,
)

__all__ = [
    # Postgres
    "PostgresProductRepository",
    "PostgresAuditLogRepository",
    "PostgresUserRepository",
    "PostgresCatalogUnitOfWork",
    # In-memory
    "InMemoryProductRepository",
    "InMemoryAuditLogRepository",
    "InMemoryUserRepository",
    "InMemoryCatalogUnitOfWork",
]
