"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios para autenticación (por email / por id).
  - Crear usuarios (registro) y promover admins (seed / create_admin).
  - Mapear filas crudas -> entidad `User` y validar `UserRole`.

Collaborators:
  - PostgresRepositoryBase (pool inyectable)
  - identity.users.User / UserRole / normalize_email

Constraints / Notes:
  - Retorna None cuando no existe el recurso (no exception por "not found").
  - Email único case-insensitive: se guarda normalizado y hay índice único
    sobre lower(email); un INSERT duplicado devuelve None (ON CONFLICT).
  - Rol persistido inválido -> DatabaseError (drift de esquema/datos).
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....identity.users import User, UserRole, normalize_email
from .connection import PostgresRepositoryBase

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = "id, email, full_name, password_hash, role, created_at, updated_at"

# R: Ordering determinístico. Si created_at empata, id ordena estable.
_USER_ORDER_BY = "created_at DESC, id DESC"


def _row_to_user(row: tuple) -> User:
    try:
        role = UserRole(row[4])
    except ValueError as exc:
        raise DatabaseError(f"Invalid user role in database: {row[4]}") from exc

    return User(
        id=row[0],
        email=row[1],
        full_name=row[2],
        password_hash=row[3],
        role=role,
        created_at=row[5],
        updated_at=row[6],
    )


class PostgresUserRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del Credential Store."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        normalized = normalize_email(email)
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE lower(email) = %s",
            params=(normalized,),
            context_msg="PostgresUserRepository: get_user_by_email failed",
            extra={"email": normalized},
        )
        return _row_to_user(row) if row else None

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            context_msg="PostgresUserRepository: get_user_by_id failed",
            extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def create_user(self, user: User) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                INSERT INTO users (id, email, full_name, password_hash, role)
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT DO NOTHING
                RETURNING {_USER_COLUMNS}
            """,
            params=(
                user.id,
                normalize_email(user.email),
                user.full_name,
                user.password_hash,
                user.role.value,
            ),
            context_msg="PostgresUserRepository: create_user failed",
            extra={"user_id": str(user.id), "role": user.role.value},
        )
        return _row_to_user(row) if row else None

    def list_users(self) -> list[User]:
        rows = self._fetchall(
            query=f"SELECT {_USER_COLUMNS} FROM users ORDER BY {_USER_ORDER_BY}",
            params=(),
            context_msg="PostgresUserRepository: list_users failed",
            extra={},
        )
        return [_row_to_user(r) for r in rows]

    def set_user_role_and_password(
        self, user_id: UUID, *, role: str, password_hash: str
    ) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                UPDATE users
                SET role = %s, password_hash = %s, updated_at = now()
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(UserRole(role).value, password_hash, user_id),
            context_msg="PostgresUserRepository: set_user_role_and_password failed",
            extra={"user_id": str(user_id), "role": role},
        )
        return _row_to_user(row) if row else None
