"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * conversión User -> ProductActor
      * parseo del id de producto del path
      * dependencias de auth ya configuradas (usuario / admin)

Colaboradores:
  - identity.auth_users (require_user, require_role)
  - domain.product_policy.ProductActor
  - crosscutting.error_responses.not_found
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from app.application.usecases.products.product_results import PRODUCT_NOT_FOUND
from app.crosscutting.error_responses import not_found
from app.domain.product_policy import ProductActor
from app.identity.auth_users import require_role, require_user
from app.identity.users import User, UserRole

# Dependencias de auth reutilizables (una instancia por proceso).
current_user = require_user()
current_admin = require_role(UserRole.ADMIN)


def to_product_actor(user: User) -> ProductActor:
    """User autenticado -> actor de la policy de productos."""
    return ProductActor.from_user(user)


def parse_product_id(raw: str) -> UUID:
    """
    Ids de producto son opacos para el cliente.

    Un id mal formado no puede existir: responde 404 igual que un id ausente.
    """
    try:
        return UUID(raw)
    except (TypeError, ValueError):
        raise not_found(PRODUCT_NOT_FOUND)
