from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from studiodesk.domain.entities.booking import Booking, BookingStatus
from studiodesk.domain.entities.commission import CommissionReport
from studiodesk.domain.entities.product import ProductCategory
from studiodesk.domain.entities.result import ErrorKind, OperationResult


def _cents(value: float) -> float:
    return round(value, 2)


class PersonRefSchema(BaseModel):
    person_id: str = Field(min_length=1)
    person_name: str = Field(min_length=1)


class BookingSchema(BaseModel):
    id: str
    class_id: str
    person_id: str
    person_name: str
    status: BookingStatus
    booked_at: datetime
    checked_in_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            class_id=booking.class_id,
            person_id=booking.person_id,
            person_name=booking.person_name,
            status=booking.status,
            booked_at=booking.booked_at,
            checked_in_at=booking.checked_in_at,
            cancelled_at=booking.cancelled_at,
        )


class OperationResultSchema(BaseModel):
    success: bool
    message: str
    error: ErrorKind | None = None
    booking: BookingSchema | None = None
    promoted_booking: BookingSchema | None = None

    @classmethod
    def from_result(cls, result: OperationResult) -> "OperationResultSchema":
        return cls(
            success=result.success,
            message=result.message,
            error=result.error,
            booking=BookingSchema.from_entity(result.booking) if result.booking else None,
            promoted_booking=(
                BookingSchema.from_entity(result.promoted_booking) if result.promoted_booking else None
            ),
        )


class ClassSchema(BaseModel):
    id: str
    name: str
    type: str
    day_of_week: str
    start_time: str
    duration_minutes: int
    capacity: int
    coach_id: str | None = None
    location: str
    booked_count: int
    spots_left: int
    waitlist_length: int


class CategoryBreakdownSchema(BaseModel):
    memberships: float = 0.0
    class_packs: float = 0.0
    drop_in: float = 0.0
    retail: float = 0.0
    other: float = 0.0


class CommissionReportSchema(BaseModel):
    seller_id: str
    seller_name: str
    seller_role: str
    total_sales: float
    transaction_count: int
    commission_rate: float
    commission_amount: float
    category_breakdown: CategoryBreakdownSchema

    @classmethod
    def from_report(cls, report: CommissionReport) -> "CommissionReportSchema":
        return cls(
            seller_id=report.seller_id,
            seller_name=report.seller_name,
            seller_role=report.seller_role,
            total_sales=_cents(report.total_sales),
            transaction_count=report.transaction_count,
            commission_rate=report.commission_rate,
            commission_amount=_cents(report.commission_amount),
            category_breakdown=CategoryBreakdownSchema(
                **{k: _cents(v) for k, v in report.category_breakdown.as_dict().items()}
            ),
        )


class LineItemSchema(BaseModel):
    product_id: str
    product_name: str
    quantity: int = Field(gt=0)
    unit_price: float = Field(ge=0)
    category: ProductCategory | None = None


class TransactionRequestSchema(BaseModel):
    items: list[LineItemSchema] = Field(min_length=1)
    seller_id: str
    location: str
    discount: float = Field(default=0.0, ge=0)
    tax: float = Field(default=0.0, ge=0)
    person_id: str | None = None
    person_name: str | None = None
    promo_code: str | None = None


class TransactionSchema(BaseModel):
    id: str
    items: list[LineItemSchema]
    subtotal: float
    discount: float
    tax: float
    total: float
    seller_id: str
    seller_name: str | None = None
    timestamp: datetime
    location: str
    person_id: str | None = None
    person_name: str | None = None
    promo_code: str | None = None


class FreezeRequestSchema(BaseModel):
    start_date: date
    end_date: date
    reason: str | None = None


class MembershipCancelRequestSchema(BaseModel):
    cancellation_date: date
    effective_date: date
    reason: str | None = None


class PersonActivitySchema(BaseModel):
    person_id: str
    kind: str | None = None
    bookings: list[BookingSchema] = Field(default_factory=list)
    last_visit: datetime | None = None
    visits_last_30_days: int = 0
    weekly_usage: int = 0
    remaining_classes: int | None = None


class AuditLogEntrySchema(BaseModel):
    id: str
    timestamp: datetime
    action: str
    entity_type: str
    entity_id: str
    details: str
    location: str
