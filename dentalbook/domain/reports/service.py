"""Reports service - loads appointments and builds summaries and PDF exports"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...shared.validators import normalize_date_string
from ..appointments.repository import AppointmentRepository
from .aggregator import ReportSummary, build_summary
from .pdf_service import ReportPDFGenerator

logger = logging.getLogger(__name__)


def _normalize_range(start_date: Optional[str], end_date: Optional[str]):
    try:
        start = normalize_date_string(start_date) if start_date else None
        end = normalize_date_string(end_date) if end_date else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return start, end


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    def get_summary(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> ReportSummary:
        start, end = _normalize_range(start_date, end_date)
        try:
            appointments = AppointmentRepository.list_appointments(self.db)
        except Exception as e:
            logger.error(f"❌ Error loading appointments for report: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to load report data") from e
        return build_summary(appointments, start, end)

    def export_pdf(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> tuple[ReportSummary, bytes]:
        summary = self.get_summary(start_date, end_date)
        try:
            pdf_bytes = ReportPDFGenerator(summary).generate()
        except Exception as e:
            logger.error(f"❌ Error generating report PDF: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to generate report") from e
        return summary, pdf_bytes
