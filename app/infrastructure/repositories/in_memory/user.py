"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Credential Store en memoria (tests / local dev).
  - Unicidad de email case-insensitive (clave = email normalizado).
  - Orden de listado alineado con Postgres: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import utcnow
from ....domain.repositories import UserRepository
from ....identity.users import User, UserRole, normalize_email


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def get_user_by_email(self, email: str) -> Optional[User]:
        normalized = normalize_email(email)
        with self._lock:
            return next(
                (u for u in self._users.values() if u.email == normalized), None
            )

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def create_user(self, user: User) -> Optional[User]:
        normalized = normalize_email(user.email)
        now = utcnow()
        with self._lock:
            if any(u.email == normalized for u in self._users.values()):
                return None
            stored = replace(user, email=normalized, created_at=now, updated_at=now)
            self._users[stored.id] = stored
            return stored

    def list_users(self) -> List[User]:
        with self._lock:
            users = list(self._users.values())
        return sorted(users, key=lambda u: (u.created_at, str(u.id)), reverse=True)

    def set_user_role_and_password(
        self, user_id: UUID, *, role: str, password_hash: str
    ) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updated = replace(
                current,
                role=UserRole(role),
                password_hash=password_hash,
                updated_at=utcnow(),
            )
            self._users[user_id] = updated
            return updated
