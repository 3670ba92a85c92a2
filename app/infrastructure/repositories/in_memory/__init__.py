"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .audit_log import InMemoryAuditLogRepository
from .product import InMemoryProductRepository
from .unit_of_work import InMemoryCatalogUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryProductRepository",
    "InMemoryAuditLogRepository",
    "InMemoryUserRepository",
    "InMemoryCatalogUnitOfWork",
]
