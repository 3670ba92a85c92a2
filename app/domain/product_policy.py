"""
===============================================================================
TARJETA CRC — domain/product_policy.py
===============================================================================

Módulo:
    Política de Acceso a Productos

Responsabilidades:
    - Definir el actor de una operación (id + email + rol).
    - Regla pura: quién muta el catálogo.

Colaboradores:
    - identity.users.UserRole
    - application/usecases/products: consultan la policy antes de escribir.

Reglas:
    - Solo admin crea / edita / elimina / restaura.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ..identity.users import User, UserRole


@dataclass(frozen=True, slots=True)
class ProductActor:
    """Actor autenticado que ejecuta una operación (auditado por email)."""

    user_id: UUID
    email: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "ProductActor":
        return cls(user_id=user.id, email=user.email, role=user.role)


def can_manage_products(actor: ProductActor | None) -> bool:
    return actor is not None and actor.role == UserRole.ADMIN
