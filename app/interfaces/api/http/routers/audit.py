"""
===============================================================================
TARJETA CRC — app/interfaces/api/http/routers/audit.py
===============================================================================

Responsibilities:
    - Exponer el audit trail paginado (solo admin).
    - Validar page/limit en el borde: fuera de rango -> 400 (no se clampa).

Collaborators:
    - ListAuditLogsUseCase (container.get_list_audit_logs_use_case)
    - schemas.audit (DTOs)
===============================================================================
"""

from __future__ import annotations

from app.application.usecases import ListAuditLogsUseCase
from app.container import get_list_audit_logs_use_case
from app.crosscutting.config import get_settings
from app.crosscutting.error_responses import validation_error
from app.crosscutting.pagination import PageRequest, Pagination
from app.identity.users import User
from fastapi import APIRouter, Depends, Query

from ..dependencies import current_admin
from ..schemas.audit import AuditLogRes, AuditLogsPageRes

router = APIRouter()

INVALID_PAGINATION = (
    "Invalid pagination parameters. Page must be >= 1, limit must be 1-100"
)


@router.get("/audit", response_model=AuditLogsPageRes, tags=["audit"])
def list_audit_logs(
    page: int = Query(1),
    limit: int | None = Query(None),
    use_case: ListAuditLogsUseCase = Depends(get_list_audit_logs_use_case),
    _admin: User = Depends(current_admin),
):
    """Entradas más recientes primero (timestamp DESC, id DESC)."""
    settings = get_settings()
    effective_limit = settings.audit_default_limit if limit is None else limit
    if page < 1 or not 1 <= effective_limit <= settings.max_page_limit:
        raise validation_error(INVALID_PAGINATION)

    result = use_case.execute(PageRequest(page=page, limit=effective_limit))
    return AuditLogsPageRes(
        data=[AuditLogRes.from_entry(e) for e in result.entries],
        pagination=Pagination.build(
            PageRequest(page=result.page, limit=result.limit), result.total
        ),
    )
