from fastapi import APIRouter, Depends

from studiodesk.api.v1.errors import result_or_raise
from studiodesk.api.v1.schemas import (
    BookingSchema,
    FreezeRequestSchema,
    MembershipCancelRequestSchema,
    OperationResultSchema,
    PersonActivitySchema,
)
from studiodesk.application.use_cases.memberships import MembershipUseCase
from studiodesk.application.use_cases.person_activity import PersonActivityUseCase
from studiodesk.domain.entities.person import PersonKind
from studiodesk.wiring.dependencies import get_membership_use_case, get_person_activity_use_case

router = APIRouter()


@router.post("/members/{member_id}/freeze", response_model=OperationResultSchema)
def freeze_membership(
    member_id: str,
    req: FreezeRequestSchema,
    uc: MembershipUseCase = Depends(get_membership_use_case),
):
    return result_or_raise(uc.freeze_membership(member_id, req.start_date, req.end_date, req.reason))


@router.post("/members/{member_id}/cancel", response_model=OperationResultSchema)
def cancel_membership(
    member_id: str,
    req: MembershipCancelRequestSchema,
    uc: MembershipUseCase = Depends(get_membership_use_case),
):
    return result_or_raise(
        uc.cancel_membership(member_id, req.cancellation_date, req.effective_date, req.reason)
    )


@router.get("/people/{person_id}/activity", response_model=PersonActivitySchema)
def person_activity(
    person_id: str,
    uc: PersonActivityUseCase = Depends(get_person_activity_use_case),
):
    person = uc.get_person(person_id)
    remaining = None
    if person is not None and person.kind == PersonKind.class_pack:
        remaining = person.record.remaining_classes
    return PersonActivitySchema(
        person_id=person_id,
        kind=person.kind.value if person else None,
        bookings=[BookingSchema.from_entity(b) for b in uc.get_person_bookings(person_id)],
        last_visit=uc.get_last_visit(person_id),
        visits_last_30_days=uc.get_visits_in_last_n_days(person_id, 30),
        weekly_usage=uc.get_weekly_usage(person_id),
        remaining_classes=remaining,
    )
