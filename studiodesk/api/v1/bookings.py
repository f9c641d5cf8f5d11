from fastapi import APIRouter, Depends, HTTPException

from studiodesk.api.v1.errors import result_or_raise
from studiodesk.api.v1.schemas import ClassSchema, OperationResultSchema, PersonRefSchema
from studiodesk.application.use_cases.booking import BookingUseCase
from studiodesk.application.use_cases.check_in import CheckInUseCase
from studiodesk.wiring.dependencies import get_booking_use_case, get_check_in_use_case

router = APIRouter()


@router.get("/classes/{class_id}", response_model=ClassSchema)
def get_class(class_id: str, uc: BookingUseCase = Depends(get_booking_use_case)):
    gym_class = uc.get_class(class_id)
    if gym_class is None:
        raise HTTPException(status_code=404, detail="Class not found")
    return ClassSchema(
        id=gym_class.id,
        name=gym_class.name,
        type=gym_class.type,
        day_of_week=gym_class.day_of_week,
        start_time=gym_class.start_time,
        duration_minutes=gym_class.duration_minutes,
        capacity=gym_class.capacity,
        coach_id=gym_class.coach_id,
        location=gym_class.location,
        booked_count=gym_class.booked_count,
        spots_left=gym_class.spots_left,
        waitlist_length=len(uc.get_waitlist(class_id)),
    )


@router.post("/classes/{class_id}/bookings", response_model=OperationResultSchema, status_code=201)
def book_class(
    class_id: str,
    req: PersonRefSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    return result_or_raise(uc.book_class(class_id, req.person_id, req.person_name))


@router.post("/classes/{class_id}/waitlist", response_model=OperationResultSchema, status_code=201)
def add_to_waitlist(
    class_id: str,
    req: PersonRefSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    return result_or_raise(uc.add_to_waitlist(class_id, req.person_id, req.person_name))


@router.post("/bookings/{booking_id}/cancel", response_model=OperationResultSchema)
def cancel_booking(booking_id: str, uc: BookingUseCase = Depends(get_booking_use_case)):
    return result_or_raise(uc.cancel_booking(booking_id))


@router.post("/bookings/{booking_id}/check-in", response_model=OperationResultSchema)
def check_in(booking_id: str, uc: CheckInUseCase = Depends(get_check_in_use_case)):
    return result_or_raise(uc.check_in_member(booking_id))
