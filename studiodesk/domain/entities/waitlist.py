from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WaitlistEntry:
    id: str
    class_id: str
    person_id: str
    person_name: str
    added_at: datetime
