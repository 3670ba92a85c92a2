# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Admin bootstrap (dev seed + create_admin CLI)
===============================================================================

Qué es:
    Asegura que exista un usuario admin. Es la única vía para obtener el rol
    admin: el registro público siempre crea usuarios con rol "user".

    - ensure_admin_user(): idempotente; lo usan el seed y scripts/create_admin.py
    - ensure_dev_admin(): wrapper gobernado por Settings (DEV_SEED_ADMIN)

Seguridad:
    - Nunca corre en producción (fail-fast).

CRC:
    Component: ensure_admin_user / ensure_dev_admin
    Responsibilities:
      - Crear admin si falta
      - Promover / resetear password si se pide force_reset
    Collaborators:
      - UserRepository (port)
      - password_hasher (identity.auth_users.hash_password)
      - Settings
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Callable
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.users import User, UserRole, normalize_email


class AdminSeedOutcome(str, Enum):
    CREATED = "created"
    RESET = "reset"
    SKIPPED = "skipped"


def ensure_admin_user(
    user_repo: UserRepository,
    *,
    email: str,
    password: str,
    full_name: str,
    password_hasher: Callable[[str], str],
    force_reset: bool = False,
) -> AdminSeedOutcome:
    """
    Crea el admin si no existe; si existe y force_reset, lo promueve a admin
    con el password dado. Caso contrario no toca nada.
    """
    normalized = normalize_email(email)
    if not normalized or not password:
        raise ValueError("Admin bootstrap requires a non-empty email and password")

    existing = user_repo.get_user_by_email(normalized)

    if existing is None:
        created = user_repo.create_user(
            User(
                id=uuid4(),
                email=normalized,
                full_name=(full_name or "").strip() or "Admin User",
                password_hash=password_hasher(password),
                role=UserRole.ADMIN,
            )
        )
        if created is not None:
            logger.info("Admin bootstrap: user created", extra={"email": normalized})
            return AdminSeedOutcome.CREATED
        # R: carrera con otro proceso; el otro ya lo creó.
        existing = user_repo.get_user_by_email(normalized)
        if existing is None:
            raise RuntimeError(f"Admin bootstrap could not create {normalized}")

    if force_reset:
        user_repo.set_user_role_and_password(
            existing.id,
            role=UserRole.ADMIN.value,
            password_hash=password_hasher(password),
        )
        logger.info("Admin bootstrap: user reset applied", extra={"email": normalized})
        return AdminSeedOutcome.RESET

    logger.info("Admin bootstrap: user exists; skipping", extra={"email": normalized})
    return AdminSeedOutcome.SKIPPED


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
) -> AdminSeedOutcome | None:
    """
    Seed de admin para desarrollo si DEV_SEED_ADMIN está activo.

    Returns None cuando está deshabilitado.
    """
    if not settings.dev_seed_admin:
        return None

    if settings.is_production():
        raise RuntimeError(
            "FATAL: DEV_SEED_ADMIN is enabled in production. "
            "Safety guard prevents accidental admin creation."
        )

    return ensure_admin_user(
        user_repo,
        email=settings.dev_seed_admin_email,
        password=settings.dev_seed_admin_password,
        full_name=settings.dev_seed_admin_full_name,
        password_hasher=password_hasher,
        force_reset=settings.dev_seed_admin_force_reset,
    )
