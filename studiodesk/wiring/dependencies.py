from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from studiodesk.core.config import settings
from studiodesk.application.entity_store import EntityStore
from studiodesk.application.ports.snapshot_store import SnapshotStorePort
from studiodesk.application.use_cases.audit_log import AuditLog
from studiodesk.application.use_cases.booking import BookingUseCase
from studiodesk.application.use_cases.check_in import CheckInUseCase
from studiodesk.application.use_cases.commission import CommissionReportUseCase
from studiodesk.application.use_cases.memberships import MembershipUseCase
from studiodesk.application.use_cases.person_activity import PersonActivityUseCase
from studiodesk.application.use_cases.transactions import TransactionUseCase
from studiodesk.application.utils.dates import default_clock, safe_timezone
from studiodesk.infrastructure.store.json_store import JsonSnapshotStore
from studiodesk.infrastructure.store.memory_store import MemorySnapshotStore


_entity_store: EntityStore | None = None


@lru_cache
def get_timezone() -> ZoneInfo:
    return safe_timezone(settings.BUSINESS_TIMEZONE)


def get_snapshot_store() -> SnapshotStorePort:
    logger = logging.getLogger(__name__)
    if settings.STORE_PROVIDER.lower() == "json":
        logger.info("Using JsonSnapshotStore at %s", settings.STORE_PATH)
        return JsonSnapshotStore(path=settings.STORE_PATH)
    logger.info("Using MemorySnapshotStore (STORE_PROVIDER=%s)", settings.STORE_PROVIDER)
    return MemorySnapshotStore()


def get_entity_store() -> EntityStore:
    global _entity_store
    if _entity_store is None:
        _entity_store = EntityStore(get_snapshot_store())
    return _entity_store


def reset_entity_store() -> None:
    global _entity_store
    _entity_store = None


def get_audit_log() -> AuditLog:
    return AuditLog(store=get_entity_store(), clock=default_clock(get_timezone()))


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        store=get_entity_store(),
        audit_log=get_audit_log(),
        clock=default_clock(get_timezone()),
    )


def get_check_in_use_case() -> CheckInUseCase:
    return CheckInUseCase(
        store=get_entity_store(),
        audit_log=get_audit_log(),
        clock=default_clock(get_timezone()),
    )


def get_commission_use_case() -> CommissionReportUseCase:
    return CommissionReportUseCase(
        store=get_entity_store(),
        timezone=get_timezone(),
        commission_rates=settings.COMMISSION_RATES,
        default_rate=settings.DEFAULT_COMMISSION_RATE,
    )


def get_transaction_use_case() -> TransactionUseCase:
    return TransactionUseCase(
        store=get_entity_store(),
        audit_log=get_audit_log(),
        clock=default_clock(get_timezone()),
    )


def get_membership_use_case() -> MembershipUseCase:
    return MembershipUseCase(store=get_entity_store(), audit_log=get_audit_log())


def get_person_activity_use_case() -> PersonActivityUseCase:
    return PersonActivityUseCase(store=get_entity_store(), clock=default_clock(get_timezone()))
