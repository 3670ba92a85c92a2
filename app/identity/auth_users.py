"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (Token Service + Credential Store)

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Registrar usuarios (rol "user" siempre) y validar credenciales.
    - Emitir JWT de acceso con expiración (default 7 días).
    - Decodificar y validar JWT (firma, exp, claims sub/email/role).
    - Exponer dependencias FastAPI (require_user, require_role).

Colaboradores:
    - crosscutting.config.get_settings: secreto y TTL.
    - crosscutting.error_responses: unauthorized/forbidden estándar.
    - container.get_user_repository: Credential Store inyectable.
    - identity.users: User / UserRole.

Decisiones de diseño:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - Claims: sub (= user id), email, role, full_name, iat, exp.
    - Un token con firma válida pero sin sub/email/role se rechaza.
    - El usuario se re-carga del store: un usuario borrado no sigue operando.
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID, uuid4

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends, Header, Request

from ..container import get_user_repository
from ..context import set_user_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import AppHTTPException, forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from .users import User, UserRole, normalize_email

# ---------------------------------------------------------------------------
# Constantes (evitan strings mágicos)
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_ROLE: str = "role"
CLAIM_FULL_NAME: str = "full_name"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_TOKEN = "Invalid token"

_password_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Contratos internos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Identidad que viaja en un access token."""

    user_id: str
    email: str
    role: UserRole
    full_name: str | None = None


def get_auth_settings() -> AuthSettings:
    """Construye un snapshot de settings de auth."""
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
    )


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Registro / login
# ---------------------------------------------------------------------------


def register_user(
    users: UserRepository, *, email: str, full_name: str, password: str
) -> User | None:
    """
    Crea un usuario con rol "user".

    Retorna None si el email ya existe (comparación case-insensitive).
    """
    normalized_email = normalize_email(email)
    if users.get_user_by_email(normalized_email) is not None:
        return None

    created = users.create_user(
        User(
            id=uuid4(),
            email=normalized_email,
            full_name=full_name.strip(),
            password_hash=hash_password(password),
            role=UserRole.USER,
        )
    )
    if created is not None:
        logger.info("User registered", extra={"user_id": str(created.id)})
    return created


def authenticate_user(users: UserRepository, email: str, password: str) -> User | None:
    """
    Valida credenciales y retorna el usuario o None.

    No diferenciamos "usuario no existe" vs "password incorrecto".
    """
    normalized_email = normalize_email(email)
    if not normalized_email or not password:
        return None

    user = users.get_user_by_email(normalized_email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected")
        return None
    return user


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user: User, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Crea un JWT de acceso firmado.

    Retorna:
        (token, expires_in_seconds)
    """
    auth_settings = settings or get_auth_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(auth_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: str(user.id),
        CLAIM_EMAIL: user.email,
        CLAIM_ROLE: user.role.value,
        CLAIM_FULL_NAME: user.full_name,
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
    }

    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    """Decodifica y valida un JWT de acceso.

    Errores:
        - 401 si expiró o firma inválida.
        - 401 si faltan claims de identidad o el rol es desconocido.
    """
    auth_settings = settings or get_auth_settings()

    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_ROLE, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized(INVALID_TOKEN) from exc

    user_id = payload.get(CLAIM_SUB)
    email = payload.get(CLAIM_EMAIL)
    role_value = payload.get(CLAIM_ROLE)

    if not user_id or not email or not role_value:
        raise unauthorized(INVALID_TOKEN)

    try:
        role = UserRole(str(role_value))
    except ValueError as exc:
        raise unauthorized(INVALID_TOKEN) from exc

    full_name = payload.get(CLAIM_FULL_NAME)
    return TokenPayload(
        user_id=str(user_id),
        email=str(email),
        role=role,
        full_name=str(full_name) if full_name else None,
    )


def verify_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload | None:
    """Variante sin excepciones: identidad o None."""
    try:
        return decode_access_token(token, settings)
    except AppHTTPException:
        return None


def get_current_user(token: str, users: UserRepository) -> User:
    """Resuelve el usuario actual a partir del access token."""
    payload = decode_access_token(token)

    try:
        user_id = UUID(payload.user_id)
    except ValueError as exc:
        raise unauthorized(INVALID_TOKEN) from exc

    user = users.get_user_by_id(user_id)
    if user is None:
        raise unauthorized(INVALID_TOKEN)
    return user


# ---------------------------------------------------------------------------
# Extracción de token
# ---------------------------------------------------------------------------


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        users: UserRepository = Depends(get_user_repository),
    ) -> User:
        token = extract_bearer_token(authorization)
        if not token:
            raise unauthorized("Access token required")

        user = get_current_user(token, users)
        request.state.user = user
        set_user_context(str(user.id))
        return user

    return dependency


def require_role(role: UserRole | str) -> Callable:
    """Dependency FastAPI: requiere un rol específico de usuario."""
    required_role = UserRole(role)

    async def dependency(user: User = Depends(require_user())) -> User:
        if user.role != required_role:
            raise forbidden("Insufficient permissions")
        return user

    return dependency
