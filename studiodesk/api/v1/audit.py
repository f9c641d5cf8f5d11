from fastapi import APIRouter, Depends

from studiodesk.api.v1.schemas import AuditLogEntrySchema
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.wiring.dependencies import get_audit_log

router = APIRouter()


@router.get("/audit-log", response_model=list[AuditLogEntrySchema])
def list_audit_log(
    entity_type: str | None = None,
    entity_id: str | None = None,
    audit: AuditLog = Depends(get_audit_log),
):
    if entity_type:
        entries = audit.filter_by_entity(entity_type, entity_id)
    else:
        entries = audit.list_all()
    return [
        AuditLogEntrySchema(
            id=e.id,
            timestamp=e.timestamp,
            action=e.action,
            entity_type=e.entity_type,
            entity_id=e.entity_id,
            details=e.details,
            location=e.location,
        )
        for e in entries
    ]
