"""Dashboard router - staff menu and per-page data"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import StaffSession, get_staff_session
from ...database import get_db
from ..appointments.schemas import AppointmentResponse
from ..appointments.service import AppointmentService
from ..patients.schemas import PatientResponse
from ..patients.service import PatientService
from ..reports.schemas import ReportSummaryResponse
from ..reports.service import ReportService
from ..scheduling.service import SchedulingService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

MENU_ITEMS = [
    {"id": "calendar", "label": "Calendar"},
    {"id": "requests", "label": "Appointment Requests"},
    {"id": "appointments", "label": "Appointment List"},
    {"id": "patients", "label": "Patient List"},
    {"id": "reports", "label": "Reports"},
]
DEFAULT_PAGE = "calendar"
PAGE_IDS = {item["id"] for item in MENU_ITEMS}


def resolve_page(page: str) -> str:
    """Unknown page ids fall back to the calendar"""
    return page if page in PAGE_IDS else DEFAULT_PAGE


def load_page_data(page: str, db: Session):
    if page == "requests":
        return [AppointmentResponse.from_model(a) for a in AppointmentService(db).list_requests()]
    if page == "appointments":
        return [AppointmentResponse.from_model(a) for a in AppointmentService(db).list_appointments()]
    if page == "patients":
        return [PatientResponse.from_model(p) for p in PatientService(db).list_patients()]
    if page == "reports":
        return ReportSummaryResponse.from_summary(ReportService(db).get_summary())
    today = date.today()
    return SchedulingService(db).get_month(today.year, today.month, today)


@router.get("")
async def get_dashboard(session: StaffSession = Depends(get_staff_session)):
    return {
        "user": {"uid": session.uid, "email": session.email, "name": session.name},
        "menu": MENU_ITEMS,
        "defaultPage": DEFAULT_PAGE,
    }


@router.get("/{page}")
async def get_dashboard_page(
    page: str,
    _: StaffSession = Depends(get_staff_session),
    db: Session = Depends(get_db),
):
    """Switch to a page and return the data it shows"""
    active = resolve_page(page)
    return {"page": active, "data": load_page_data(active, db)}
