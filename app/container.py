"""
===============================================================================
TARJETA CRC — app/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, unit of work, casos de uso).
  - Exponer factories para FastAPI (Depends) y para scripts.
  - Mantener singletons con caching (lru_cache).
  - Decidir in-memory vs PostgreSQL según Settings.app_env.

Colaboradores:
  - app.crosscutting.config.get_settings
  - app.domain.repositories.* (puertos)
  - app.infrastructure.repositories.* (implementaciones)
  - app.application.usecases.* (casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - En modo in-memory, el unit of work comparte las MISMAS instancias de
    stores que las queries (lo escrito en una transacción se lee después).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListAuditLogsUseCase,
    ListProductsUseCase,
    RestoreProductUseCase,
    UpdateProductUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    AuditLogRepository,
    CatalogUnitOfWork,
    ProductRepository,
    UserRepository,
)
from .infrastructure.repositories import (
    InMemoryAuditLogRepository,
    InMemoryCatalogUnitOfWork,
    InMemoryProductRepository,
    InMemoryUserRepository,
    PostgresAuditLogRepository,
    PostgresCatalogUnitOfWork,
    PostgresProductRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => stores in-memory."""
    return get_settings().is_test_env()


def uses_in_memory_storage() -> bool:
    return _is_test_env()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_product_repository() -> ProductRepository:
    """Product Store (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryProductRepository()
    return PostgresProductRepository()


@lru_cache(maxsize=1)
def get_audit_log_repository() -> AuditLogRepository:
    """Audit Store (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryAuditLogRepository()
    return PostgresAuditLogRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Credential Store (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_unit_of_work() -> CatalogUnitOfWork:
    """Transacción producto + auditoría."""
    if _is_test_env():
        return InMemoryCatalogUnitOfWork(
            products=get_product_repository(),
            audit_logs=get_audit_log_repository(),
        )
    return PostgresCatalogUnitOfWork()


def reset_container() -> None:
    """Olvida los singletons (tests / recarga de settings)."""
    for factory in (
        get_product_repository,
        get_audit_log_repository,
        get_user_repository,
        get_unit_of_work,
    ):
        factory.cache_clear()


# =============================================================================
# Casos de uso (factories para Depends)
# =============================================================================


def get_create_product_use_case() -> CreateProductUseCase:
    return CreateProductUseCase(get_unit_of_work())


def get_update_product_use_case() -> UpdateProductUseCase:
    return UpdateProductUseCase(get_unit_of_work())


def get_delete_product_use_case() -> DeleteProductUseCase:
    return DeleteProductUseCase(get_unit_of_work())


def get_restore_product_use_case() -> RestoreProductUseCase:
    return RestoreProductUseCase(get_unit_of_work())


def get_get_product_use_case() -> GetProductUseCase:
    return GetProductUseCase(get_product_repository())


def get_list_products_use_case() -> ListProductsUseCase:
    settings = get_settings()
    return ListProductsUseCase(
        get_product_repository(),
        default_limit=settings.products_default_limit,
        max_limit=settings.max_page_limit,
    )


def get_list_audit_logs_use_case() -> ListAuditLogsUseCase:
    return ListAuditLogsUseCase(get_audit_log_repository())
