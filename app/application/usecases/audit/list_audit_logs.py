"""
===============================================================================
USE CASE: List Audit Logs
===============================================================================

Class:
    ListAuditLogsUseCase

Responsibilities:
    - Página del Audit Store: timestamp DESC, desempate por id DESC.
    - Devolver total para calcular total_pages.

Collaborators:
    - AuditLogRepository.list_entries / count_entries
    - crosscutting.pagination.PageRequest (page/limit ya validados por HTTP)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....crosscutting.pagination import PageRequest
from ....domain.audit import AuditLogEntry
from ....domain.repositories import AuditLogRepository


@dataclass
class AuditLogPageResult:
    entries: List[AuditLogEntry] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20


class ListAuditLogsUseCase:
    def __init__(self, audit_log_repository: AuditLogRepository) -> None:
        self._audit_logs = audit_log_repository

    def execute(self, window: PageRequest) -> AuditLogPageResult:
        total = self._audit_logs.count_entries()
        entries = (
            self._audit_logs.list_entries(limit=window.limit, offset=window.offset)
            if total > window.offset
            else []
        )
        return AuditLogPageResult(
            entries=entries, total=total, page=window.page, limit=window.limit
        )
