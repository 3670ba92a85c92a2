"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/audit_log.py
============================================================
Class: PostgresAuditLogRepository

Responsibilities:
  - Append de entradas de auditoría en `audit_logs` (INSERT ... RETURNING).
  - Listado paginado: timestamp DESC, id DESC (id identity = orden de inserción).

Collaborators:
  - domain.audit.AuditLogEntry / AuditAction
  - PostgresRepositoryBase (pool o conexión de transacción)

Notes:
  - Append-only: no existen UPDATE ni DELETE sobre esta tabla.
  - Dentro de un unit of work comparte conexión con el Product Store:
    si el append falla, la mutación del producto hace rollback.
============================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DatabaseError
from ....domain.audit import AuditAction, AuditLogEntry
from .connection import PostgresRepositoryBase

_AUDIT_COLUMNS = "id, action, user_email, product_id, product_name, details, timestamp"


class PostgresAuditLogRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del Audit Store."""

    @staticmethod
    def _row_to_entry(row: tuple) -> AuditLogEntry:
        try:
            action = AuditAction(row[1])
        except ValueError as exc:
            raise DatabaseError(f"Invalid audit action in database: {row[1]}") from exc

        return AuditLogEntry(
            id=row[0],
            action=action,
            actor_email=row[2],
            product_id=row[3],
            product_name=row[4],
            details=row[5],
            timestamp=row[6],
        )

    def record(self, entry: AuditLogEntry) -> AuditLogEntry:
        row = self._fetchone(
            query=f"""
                INSERT INTO audit_logs
                    (action, user_email, product_id, product_name, details)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING {_AUDIT_COLUMNS}
            """,
            params=(
                entry.action.value,
                entry.actor_email,
                entry.product_id,
                entry.product_name,
                entry.details,
            ),
            context_msg="PostgresAuditLogRepository: record failed",
            extra={
                "action": entry.action.value,
                "product_id": str(entry.product_id) if entry.product_id else None,
            },
        )
        if row is None:
            raise DatabaseError("PostgresAuditLogRepository: record returned no row")
        return self._row_to_entry(row)

    def list_entries(self, *, limit: int, offset: int) -> list[AuditLogEntry]:
        rows = self._fetchall(
            query=f"""
                SELECT {_AUDIT_COLUMNS}
                FROM audit_logs
                ORDER BY timestamp DESC, id DESC
                LIMIT %s OFFSET %s
            """,
            params=(limit, offset),
            context_msg="PostgresAuditLogRepository: list_entries failed",
            extra={"limit": limit, "offset": offset},
        )
        return [self._row_to_entry(r) for r in rows]

    def count_entries(self) -> int:
        row = self._fetchone(
            query="SELECT COUNT(*) FROM audit_logs",
            params=(),
            context_msg="PostgresAuditLogRepository: count_entries failed",
            extra={},
        )
        return int(row[0]) if row else 0
