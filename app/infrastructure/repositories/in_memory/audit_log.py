"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/audit_log.py
============================================================
Class: InMemoryAuditLogRepository

Responsibilities:
  - Audit Store en memoria, append-only.
  - Asignar id monotónico creciente y timestamp al registrar.
  - Listar con el mismo orden que Postgres: timestamp DESC, id DESC.

Collaborators:
  - domain.audit.AuditLogEntry
  - domain.repositories.AuditLogRepository
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import RLock
from typing import List

from ....domain.audit import AuditLogEntry
from ....domain.entities import utcnow
from ....domain.repositories import AuditLogRepository


class InMemoryAuditLogRepository(AuditLogRepository):
    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: List[AuditLogEntry] = []
        self._next_id = 1

    def snapshot(self) -> tuple[List[AuditLogEntry], int]:
        with self._lock:
            return list(self._entries), self._next_id

    def restore(self, state: tuple[List[AuditLogEntry], int]) -> None:
        entries, next_id = state
        with self._lock:
            self._entries = list(entries)
            self._next_id = next_id

    def record(self, entry: AuditLogEntry) -> AuditLogEntry:
        with self._lock:
            stored = replace(entry, id=self._next_id, timestamp=utcnow())
            self._next_id += 1
            self._entries.append(stored)
            return stored

    def list_entries(self, *, limit: int, offset: int) -> List[AuditLogEntry]:
        with self._lock:
            entries = list(self._entries)
        entries.sort(key=lambda e: (e.timestamp, e.id), reverse=True)
        return entries[offset : offset + limit]

    def count_entries(self) -> int:
        with self._lock:
            return len(self._entries)
