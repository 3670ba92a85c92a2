"""
===============================================================================
TARJETA CRC — app/api/auth_routes.py (Registro, Login y Perfil)
===============================================================================

Responsabilidades:
  - Exponer endpoints de autenticación de usuario (register/login/profile).
  - Emitir JWT de acceso (Authorization: Bearer).
  - Exponer el listado administrativo de usuarios.

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ identity.auth_users.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.
  - DTOs con extra="forbid": campos desconocidos -> 400.

Colaboradores:
  - identity.auth_users: register_user, authenticate_user, create_access_token,
    require_user, require_role
  - container.get_user_repository: Credential Store
  - crosscutting.error_responses: conflict / unauthorized
===============================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..container import get_user_repository
from ..crosscutting.error_responses import (
    OPENAPI_ERROR_RESPONSES,
    conflict,
    unauthorized,
)
from ..domain.repositories import UserRepository
from ..identity.auth_users import (
    INVALID_CREDENTIALS,
    authenticate_user,
    create_access_token,
    register_user,
    require_role,
    require_user,
)
from ..identity.users import User, UserRole, normalize_email

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

USER_ALREADY_EXISTS = "User already exists"


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=3, max_length=320)
    full_name: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., min_length=6, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        email = normalize_email(v)
        if not _EMAIL_RE.match(email):
            raise ValueError("Invalid email format")
        return email

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        name = v.strip()
        if not name:
            raise ValueError("Full name is required")
        return name


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return normalize_email(v)


class UserResponse(BaseModel):
    id: UUID
    email: str
    full_name: str
    role: UserRole
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str
    expires_in: int


class ProfileResponse(BaseModel):
    user: UserResponse


class UsersResponse(BaseModel):
    users: list[UserResponse]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _to_user_response(user: User) -> UserResponse:
    """Convierte entidad de usuario a DTO de respuesta (sin password_hash)."""
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
        created_at=user.created_at,
    )


def _auth_response(user: User, message: str) -> AuthResponse:
    token, expires_in = create_access_token(user)
    return AuthResponse(
        message=message,
        user=_to_user_response(user),
        token=token,
        expires_in=expires_in,
    )


# -----------------------------------------------------------------------------
# Endpoints públicos
# -----------------------------------------------------------------------------


@router.post(
    "/auth/register", response_model=AuthResponse, status_code=201, tags=["auth"]
)
def register(
    req: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
):
    """
    Registra un usuario (rol "user") y devuelve un JWT.

    El rol no es elegible por el cliente: los admins se crean por CLI/seed.
    """
    user = register_user(
        users, email=req.email, full_name=req.full_name, password=req.password
    )
    if user is None:
        raise conflict(USER_ALREADY_EXISTS)
    return _auth_response(user, "User created successfully")


@router.post("/auth/login", response_model=AuthResponse, tags=["auth"])
def login(
    req: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
):
    """Inicia sesión y devuelve JWT."""
    user = authenticate_user(users, req.email, req.password)
    if user is None:
        raise unauthorized(INVALID_CREDENTIALS)
    return _auth_response(user, "Login successful")


# -----------------------------------------------------------------------------
# Endpoints autenticados
# -----------------------------------------------------------------------------


@router.get("/auth/profile", response_model=ProfileResponse, tags=["auth"])
def profile(user: User = Depends(require_user())):
    """Devuelve el usuario autenticado."""
    return ProfileResponse(user=_to_user_response(user))


@router.get("/auth/users", response_model=UsersResponse, tags=["auth"])
def list_users_admin(
    _admin: User = Depends(require_role(UserRole.ADMIN)),
    users: UserRepository = Depends(get_user_repository),
):
    """Lista usuarios (admin), más nuevos primero."""
    return UsersResponse(users=[_to_user_response(u) for u in users.list_users()])


__all__ = ["router"]
