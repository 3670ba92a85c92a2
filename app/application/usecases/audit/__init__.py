"""Audit use cases (read side of the Audit Store)."""

from .list_audit_logs import AuditLogPageResult, ListAuditLogsUseCase

__all__ = ["ListAuditLogsUseCase", "AuditLogPageResult"]
