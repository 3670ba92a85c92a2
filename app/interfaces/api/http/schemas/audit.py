"""
Schemas HTTP para el audit trail (solo lectura).

Campos con los nombres que consume el cliente web (user_email, product_name).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from app.crosscutting.pagination import Page
from app.domain.audit import AuditAction, AuditLogEntry
from pydantic import BaseModel


class AuditLogRes(BaseModel):
    id: int
    action: AuditAction
    user_email: str
    product_id: UUID | None = None
    product_name: str | None = None
    details: str | None = None
    timestamp: datetime | None = None

    @classmethod
    def from_entry(cls, entry: AuditLogEntry) -> "AuditLogRes":
        return cls(
            id=entry.id or 0,
            action=entry.action,
            user_email=entry.actor_email,
            product_id=entry.product_id,
            product_name=entry.product_name,
            details=entry.details,
            timestamp=entry.timestamp,
        )


AuditLogsPageRes = Page[AuditLogRes]
