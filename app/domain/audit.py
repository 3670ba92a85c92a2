"""
===============================================================================
TARJETA CRC — domain/audit.py
===============================================================================

Módulo:
    Modelos de Auditoría (Dominio)

Responsabilidades:
    - Definir las acciones auditables sobre productos (AuditAction).
    - Definir la entrada append-only (AuditLogEntry).
    - Armar los textos de detalle de cada transición.

Colaboradores:
    - domain.repositories.AuditLogRepository: persiste y lista entradas.
    - application/usecases/products: registran una entrada por mutación.
    - infra repos: mapean hacia/desde DB.

Notas:
    - Append-only: ninguna entrada se edita ni se borra.
    - actor_email y product_name son snapshots desnormalizados
      (sobreviven a cambios/borrados del usuario o del producto).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class AuditAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"


@dataclass(frozen=True, slots=True)
class AuditLogEntry:
    """
    Entrada de auditoría.

    id es None hasta que el store la persiste (id monotónico creciente).
    """

    action: AuditAction
    actor_email: str
    product_id: UUID | None = None
    product_name: str | None = None
    details: str | None = None
    timestamp: datetime | None = None
    id: int | None = None


def created_details(name: str) -> str:
    return f"Product created: {name}"


def updated_details(changed_fields: list[str], *, new_name: str | None = None) -> str:
    """Resume qué cambió; si cambió el nombre, incluye el nuevo."""
    if not changed_fields:
        return "Product updated"
    parts = [
        f"name -> {new_name}" if field == "name" and new_name else field
        for field in changed_fields
    ]
    return "Product updated: " + ", ".join(parts)


DELETED_DETAILS = "Product soft deleted"
RESTORED_DETAILS = "Product restored from deleted state"
