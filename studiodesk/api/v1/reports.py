from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from studiodesk.api.v1.schemas import CategoryBreakdownSchema, CommissionReportSchema
from studiodesk.application.use_cases.commission import CommissionReportUseCase
from studiodesk.wiring.dependencies import get_commission_use_case

router = APIRouter()


def _check_range(start: datetime, end: datetime) -> None:
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")


@router.get("/reports/commissions", response_model=list[CommissionReportSchema])
def list_commission_reports(
    start: datetime,
    end: datetime,
    location: str = Query("all"),
    uc: CommissionReportUseCase = Depends(get_commission_use_case),
):
    _check_range(start, end)
    return [CommissionReportSchema.from_report(r) for r in uc.get_all_commission_reports(location, start, end)]


@router.get("/reports/commissions/{seller_id}", response_model=CommissionReportSchema)
def get_commission_report(
    seller_id: str,
    start: datetime,
    end: datetime,
    uc: CommissionReportUseCase = Depends(get_commission_use_case),
):
    _check_range(start, end)
    return CommissionReportSchema.from_report(uc.get_commission_report(seller_id, start, end))


@router.get("/reports/revenue-by-category", response_model=CategoryBreakdownSchema)
def revenue_by_category(
    start: datetime,
    end: datetime,
    location: str = Query("all"),
    uc: CommissionReportUseCase = Depends(get_commission_use_case),
):
    _check_range(start, end)
    breakdown = uc.get_revenue_by_category(location, start, end)
    return CategoryBreakdownSchema(**{k: round(v, 2) for k, v in breakdown.as_dict().items()})
