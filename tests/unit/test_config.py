"""
Name: Settings Validation Tests

Responsibilities:
  - DATABASE_URL required outside test environments
  - Production refuses default/short JWT secrets and the dev admin seed
  - Pool bounds and page limits are validated
"""

import pytest
from pydantic import ValidationError

from app.crosscutting.config import Settings

pytestmark = pytest.mark.unit

STRONG_SECRET = "x" * 40


def test_test_env_does_not_need_database_url():
    settings = Settings(app_env="test", database_url="")

    assert settings.is_test_env() is True
    assert settings.products_default_limit == 10
    assert settings.audit_default_limit == 20


def test_database_url_required_outside_tests():
    with pytest.raises(ValidationError, match="DATABASE_URL"):
        Settings(app_env="development", database_url="")


@pytest.mark.parametrize("secret", ["dev-secret", "changeme", "short-secret"])
def test_production_rejects_weak_jwt_secret(secret):
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(app_env="production", database_url="postgresql://x", jwt_secret=secret)


def test_production_rejects_dev_seed_admin():
    with pytest.raises(ValidationError, match="DEV_SEED_ADMIN"):
        Settings(
            app_env="production",
            database_url="postgresql://x",
            jwt_secret=STRONG_SECRET,
            dev_seed_admin=True,
        )


def test_production_with_strong_secret_is_accepted():
    settings = Settings(
        app_env="Production", database_url="postgresql://x", jwt_secret=STRONG_SECRET
    )

    assert settings.is_production() is True


def test_pool_bounds():
    with pytest.raises(ValidationError, match="db_pool_min_size"):
        Settings(app_env="test", db_pool_min_size=5, db_pool_max_size=2)


@pytest.mark.parametrize("field", ["products_default_limit", "audit_default_limit"])
def test_default_page_limits_in_range(field):
    with pytest.raises(ValidationError):
        Settings(app_env="test", **{field: 101})


def test_allowed_origins_list():
    settings = Settings(
        app_env="test", allowed_origins=" http://a.test , ,http://b.test"
    )

    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]
