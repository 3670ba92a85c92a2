"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Force the test environment (in-memory stores, no .env) before app imports
  - Reset cached singletons (settings, repositories) between tests
  - Provide users, tokens, headers and a TestClient bound to the real app

Collaborators:
  - pytest: Test framework
  - fastapi.testclient.TestClient
  - app.container: in-memory stores selected by APP_ENV=test

Notes:
  - Fixtures are auto-discovered by pytest
  - Every test starts with empty stores (reset_container)
"""

import os
import sys
from decimal import Decimal
from pathlib import Path
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# R: must happen before any app module calls get_settings()
os.environ["APP_ENV"] = "test"
os.environ.pop("DEV_SEED_ADMIN", None)

from app.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from app.container import get_user_repository, reset_container  # noqa: E402
from app.domain.entities import Product  # noqa: E402
from app.identity.auth_users import create_access_token, hash_password  # noqa: E402
from app.identity.users import User, UserRole  # noqa: E402

ADMIN_PASSWORD = "admin123"
USER_PASSWORD = "user1234"


# ============================================================================
# Global state
# ============================================================================


@pytest.fixture(autouse=True)
def _fresh_container():
    """R: Empty stores and fresh settings for every test."""
    app_config.get_settings.cache_clear()
    reset_container()
    yield
    reset_container()
    app_config.get_settings.cache_clear()


# ============================================================================
# Identity fixtures
# ============================================================================


def make_user(
    role: UserRole = UserRole.USER,
    *,
    email: str | None = None,
    password: str = USER_PASSWORD,
    full_name: str = "Test User",
) -> User:
    return User(
        id=uuid4(),
        email=email or f"{role.value}-{uuid4().hex[:8]}@example.com",
        full_name=full_name,
        password_hash=hash_password(password),
        role=role,
    )


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def user_repo():
    return get_user_repository()


@pytest.fixture
def admin_user(user_repo) -> User:
    return user_repo.create_user(
        make_user(
            UserRole.ADMIN,
            email="admin@example.com",
            password=ADMIN_PASSWORD,
            full_name="Admin User",
        )
    )


@pytest.fixture
def regular_user(user_repo) -> User:
    return user_repo.create_user(
        make_user(UserRole.USER, email="user@example.com", full_name="Regular User")
    )


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    token, _ = create_access_token(admin_user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(regular_user) -> dict[str, str]:
    token, _ = create_access_token(regular_user)
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# HTTP client
# ============================================================================


@pytest.fixture
def client():
    """TestClient against the real app (lifespan runs with in-memory stores)."""
    from fastapi.testclient import TestClient

    from app.api.main import app

    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Test Data Factories
# ============================================================================


class ProductFactory:
    """R: Factory for domain products (not persisted)."""

    @staticmethod
    def create(
        name: str = "Widget",
        price: str = "9.99",
        *,
        created_by=None,
        description: str | None = None,
        is_deleted: bool = False,
    ) -> Product:
        return Product(
            id=uuid4(),
            name=name,
            price=Decimal(price),
            created_by=created_by or uuid4(),
            description=description,
            is_deleted=is_deleted,
        )


@pytest.fixture
def product_factory() -> type[ProductFactory]:
    return ProductFactory
