from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.core.constants import MAX_REPORT_YEAR, MIN_REPORT_YEAR, TrendPeriodEnum
from app.core.database import get_db
from app.models.user import User
from app.schemas.report import MonthlyAnalysisEntry, MonthlyReport, ReportSummary, TrendReport, YearlyReport
from app.schemas.response import APIResponse
from app.services.export import (
    CSV_MEDIA_TYPE,
    EXCEL_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    export_filename,
    export_service,
)
from app.services.report import report_service
from app.utils import deps

router = APIRouter()

def _attachment(content, media_type: str, extension: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(extension)}"'},
    )

@router.get("/monthly", response_model=APIResponse[MonthlyReport])
def get_monthly_report(
    year: int = Query(..., ge=MIN_REPORT_YEAR, le=MAX_REPORT_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Month totals from the month's latest snapshot, or live totals when there is none."""
    return APIResponse(data=report_service.get_monthly_report(db, user=current_user, year=year, month=month))

@router.get("/yearly", response_model=APIResponse[YearlyReport])
def get_yearly_report(
    year: int = Query(..., ge=MIN_REPORT_YEAR, le=MAX_REPORT_YEAR),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    return APIResponse(data=report_service.get_yearly_report(db, user=current_user, year=year))

@router.get("/summary", response_model=APIResponse[ReportSummary])
def get_report_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    return APIResponse(data=report_service.get_summary(db, user=current_user))

@router.get("/trends", response_model=APIResponse[TrendReport])
def get_trends(
    period: TrendPeriodEnum = Query(TrendPeriodEnum.THREE_MONTHS),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    """Estimated portfolio value over time, interpolated between acquisition and current prices."""
    trends = report_service.get_trends(
        db, user=current_user, period=period, start_date=start_date, end_date=end_date
    )
    return APIResponse(data=trends)

@router.get("/monthly-analysis", response_model=APIResponse[List[MonthlyAnalysisEntry]])
def get_monthly_analysis(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    return APIResponse(data=report_service.get_monthly_analysis(db, user=current_user))

@router.get("/export/csv")
def export_csv(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    content = export_service.export_csv(db, user=current_user).encode("utf-8")
    return _attachment(content, CSV_MEDIA_TYPE, "csv")

@router.get("/export/excel")
def export_excel(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    return _attachment(export_service.export_excel(db, user=current_user), EXCEL_MEDIA_TYPE, "xlsx")

@router.get("/export/pdf")
def export_pdf(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
):
    return _attachment(export_service.export_pdf(db, user=current_user), PDF_MEDIA_TYPE, "pdf")
