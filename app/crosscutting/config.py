"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults for the catalog API (token TTL, page sizes, pool bounds)

Collaborators:
  - api/main.py: reads settings for CORS, lifespan and startup validation
  - container.py: picks in-memory vs PostgreSQL stores from app_env
  - identity/auth_users.py: JWT secret and TTL

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - database_url is only optional in test environments (in-memory stores)
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TEST_ENVS = frozenset({"test", "testing", "ci"})


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: Application environment (development/test/production)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes (default: 7 days)
        log_level: Root level for the app logger
        log_json: Emit JSON lines (False = plain text, handy locally)
        products_default_limit: Default page size for GET /api/products
        audit_default_limit: Default page size for GET /api/audit
        max_page_limit: Upper bound for any page size
    """

    database_url: str = ""

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 7 * 24 * 60

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Pagination
    products_default_limit: int = 10
    audit_default_limit: int = 20
    max_page_limit: int = 100

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Dev Tools (Backend Safe)
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@example.com"
    dev_seed_admin_password: str = "admin123"
    dev_seed_admin_full_name: str = "Admin User"
    dev_seed_admin_force_reset: bool = False

    @field_validator("jwt_access_ttl_minutes", "max_page_limit")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be greater than 0")
        return v

    @field_validator("products_default_limit", "audit_default_limit")
    @classmethod
    def default_limit_in_range(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("default page limits must be between 1 and 100")
        return v

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_min_size < 1 or self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be >= 1 and "
                f"<= db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_database_requirements(self):
        if not self.database_url.strip() and not self.is_test_env():
            raise ValueError("DATABASE_URL is required outside test environments")
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if self.dev_seed_admin:
            raise ValueError("DEV_SEED_ADMIN must be disabled in production")

        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test_env(self) -> bool:
        return self.app_env.strip().lower() in TEST_ENVS

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
