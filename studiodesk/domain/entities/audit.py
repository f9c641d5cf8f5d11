from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuditLogEntry:
    id: str
    timestamp: datetime
    action: str
    entity_type: str
    entity_id: str
    details: str
    location: str
