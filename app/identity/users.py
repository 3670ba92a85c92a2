"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (Credential Store / JWT)

Responsabilidades:
    - Definir el enum de roles (admin / user).
    - Definir el dataclass User utilizado por registro, login y token.
    - Normalizar emails (la unicidad es case-insensitive).

Colaboradores:
    - identity/auth_users.py: usa User y UserRole para emitir/validar JWT.
    - infrastructure/repositories/*/user.py: mapean filas -> User.
    - domain/product_policy.py: decide permisos por rol.

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados para autenticación JWT."""

    ADMIN = "admin"
    USER = "user"


def normalize_email(email: str | None) -> str:
    """trim + lower: la forma canónica con la que se guarda y se busca."""
    return (email or "").strip().lower()


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario utilizado por autenticación (JWT)."""

    id: UUID
    email: str
    full_name: str
    password_hash: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
