"""Reports router - financial summary and PDF export for staff"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import StaffSession, get_staff_session
from ...database import get_db
from .aggregator import report_filename
from .schemas import ReportSummaryResponse
from .service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    """Dependency injection for ReportService"""
    return ReportService(db)


@router.get("/summary", response_model=ReportSummaryResponse)
async def get_report_summary(
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    _: StaffSession = Depends(get_staff_session),
    service: ReportService = Depends(get_report_service),
):
    """Metrics and chart series for non-pending appointments in the date range"""
    return ReportSummaryResponse.from_summary(service.get_summary(startDate, endDate))


@router.get("/export")
async def export_report(
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    _: StaffSession = Depends(get_staff_session),
    service: ReportService = Depends(get_report_service),
):
    summary, pdf_bytes = service.export_pdf(startDate, endDate)
    filename = report_filename(summary.start_date, summary.end_date)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
