"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over psycopg 3 + psycopg_pool.
"""

from .audit_log import PostgresAuditLogRepository
from .product import PostgresProductRepository
from .unit_of_work import PostgresCatalogUnitOfWork
from .user import PostgresUserRepository

__all__ = [
    "PostgresProductRepository",
    "PostgresAuditLogRepository",
    "PostgresUserRepository",
    "PostgresCatalogUnitOfWork",
]
