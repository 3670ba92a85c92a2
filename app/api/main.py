"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, security headers, request context)
  - Mount catalog and auth routers under the /api prefix
  - Expose liveness and readiness endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - SecurityHeadersMiddleware: static security headers + CSP
  - interfaces.api.http.router: products + audit endpoints
  - api.auth_routes: register / login / profile / users

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Storage is PostgreSQL outside test envs; in-memory for APP_ENV=test|testing|ci

Notes:
  - Middleware order matters: RequestContext → SecurityHeaders → CORS → routes
  - /healthz and /readyz follow the Kubernetes probe convention

Production Readiness:
  - Env validation enforced by Settings (fail-fast on first get_settings())
  - Request tracing with X-Request-Id header
  - Structured JSON logging with request correlation
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_user_repository, uses_in_memory_storage
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..crosscutting.security import SecurityHeadersMiddleware
from ..identity.auth_users import hash_password
from ..infrastructure.db.pool import close_pool, init_pool, ping
from ..interfaces.api.http.router import router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Initializes pool and runs the dev seed."""
    settings = get_settings()
    in_memory = uses_in_memory_storage()

    # Initialize DB pool (must happen before any repository usage)
    if not in_memory:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        # Dev seed admin (only does something if DEV_SEED_ADMIN is enabled)
        try:
            ensure_dev_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=hash_password,
            )
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise

        logger.info(
            "Catalog API starting up",
            extra={
                "app_env": settings.app_env,
                "storage": "memory" if in_memory else "postgres",
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )

        yield

    finally:
        close_pool()
        logger.info("Catalog API shutting down")


# R: Create FastAPI application instance with API metadata
app = FastAPI(
    title="Product Catalog API",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "User registration and login (JWT)"},
        {"name": "products", "description": "Product catalog (writes: admin only)"},
        {"name": "audit", "description": "Audit trail of product changes (admin)"},
    ],
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        routes=app.routes,
        tags=app.openapi_tags,
    )
    openapi_schema["components"] = openapi_schema.get("components", {})
    openapi_schema["components"]["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "JWT access token via Authorization: Bearer <token>.",
        },
    }
    # R: Bearer everywhere except the public endpoints
    openapi_schema["security"] = [{"BearerAuth": []}]
    public_paths = {
        "/healthz",
        "/readyz",
        f"{API_PREFIX}/auth/login",
        f"{API_PREFIX}/auth/register",
    }
    for path, methods in openapi_schema.get("paths", {}).items():
        if path not in public_paths:
            continue
        for operation in methods.values():
            if isinstance(operation, dict):
                operation["security"] = []

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


# R: Middleware order (last added = first to execute):
# 1. RequestContextMiddleware - sets request_id
# 2. SecurityHeadersMiddleware - adds headers to every response
# 3. CORSMiddleware - handles preflight
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_allowed_origins_list(),
    allow_credentials=get_settings().cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)

# R: Register API routes under /api
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(router, prefix=API_PREFIX)

# R: Register exception handlers for structured error responses
register_exception_handlers(app)


@app.get("/healthz", tags=["health"])
def healthz(request: Request):
    """Liveness: el proceso responde (no toca dependencias)."""
    return {"ok": True, "request_id": getattr(request.state, "request_id", None)}


@app.get("/readyz", tags=["health"])
def readyz(request: Request):
    """
    Readiness: la base responde.

    Returns:
        ok: True if core dependencies are operational
        db: "connected", "disconnected" or "memory"
        request_id: Correlation ID for this request
    """
    request_id = getattr(request.state, "request_id", None)
    if uses_in_memory_storage():
        return {"ok": True, "db": "memory", "request_id": request_id}

    if ping():
        return {"ok": True, "db": "connected", "request_id": request_id}

    logger.warning("Ready check: DB unavailable")
    return JSONResponse(
        status_code=503,
        content={"ok": False, "db": "disconnected", "request_id": request_id},
    )
