"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the catalog (ports): products, audit log, users.
- Define the unit of work that binds a product mutation and its audit entry
  to one atomic transaction.
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).

Collaborators
- domain.entities: Product, ProductFilter
- domain.audit: AuditLogEntry
- identity.users: User
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.

Notes
- State transitions are conditional writes: the store only flips is_deleted
  when the row currently holds the expected value, and reports whether it did.
- Storage failures surface as crosscutting.exceptions.DatabaseError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ContextManager, List, Mapping, Optional, Protocol
from uuid import UUID

from ..identity.users import User
from .audit import AuditLogEntry
from .entities import Product, ProductFilter


class ProductRepository(Protocol):
    """
    R: Interface for product persistence (Product Store).

    Implementations must provide:
      - Insert / lookup / filtered listing with total count
      - Partial update restricted to active rows
      - Compare-and-swap soft delete / restore
    """

    def create_product(self, product: Product) -> Product:
        """R: Insert a new product; returns it with server timestamps."""
        ...

    def get_product(self, product_id: UUID) -> Optional[Product]:
        """R: Fetch a product by id, deleted or not."""
        ...

    def list_products(
        self, product_filter: ProductFilter, *, limit: int, offset: int
    ) -> List[Product]:
        """R: One page of products matching the filter, in filter order."""
        ...

    def count_products(self, product_filter: ProductFilter) -> int:
        """R: Total rows matching the filter (for pagination)."""
        ...

    def update_product(
        self, product_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Product]:
        """
        R: Apply changes only if the product exists and is active.

        Returns the updated product, or None when no row was changed.
        updated_at always advances.
        """
        ...

    def set_deleted(self, product_id: UUID, *, is_deleted: bool) -> Optional[Product]:
        """
        R: Flip is_deleted to the given value only if it currently holds the
        opposite one. Returns the updated product, or None when no row changed.
        """
        ...


class AuditLogRepository(Protocol):
    """R: Append-only audit sink (Audit Store)."""

    def record(self, entry: AuditLogEntry) -> AuditLogEntry:
        """R: Append an entry; returns it with id and timestamp assigned."""
        ...

    def list_entries(self, *, limit: int, offset: int) -> List[AuditLogEntry]:
        """R: Newest first; ties broken by insertion order (id desc)."""
        ...

    def count_entries(self) -> int:
        ...


class UserRepository(Protocol):
    """R: Credential Store."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Case-insensitive lookup."""
        ...

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def create_user(self, user: User) -> Optional[User]:
        """R: Insert; returns None when the email is already taken."""
        ...

    def list_users(self) -> List[User]:
        """R: All users, newest first."""
        ...

    def set_user_role_and_password(
        self, user_id: UUID, *, role: str, password_hash: str
    ) -> Optional[User]:
        """R: Admin bootstrap (dev seed / create_admin)."""
        ...


@dataclass(frozen=True)
class CatalogTransaction:
    """Stores bound to one open transaction."""

    products: ProductRepository
    audit_logs: AuditLogRepository


class CatalogUnitOfWork(Protocol):
    """
    R: Opens an atomic scope over the Product Store and the Audit Store.

    Leaving the context normally commits both writes; an exception rolls
    both back and propagates.
    """

    def transaction(self) -> ContextManager[CatalogTransaction]:
        ...
