"""Booking router - public endpoints for patients requesting appointments"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...config import BOOKING_RATE_LIMIT, BOOKING_RATE_WINDOW_SECONDS
from ...database import get_db
from ...rate_limiter import create_rate_limiter
from . import workflow
from .schemas import (
    BookingDraft,
    BookingOptions,
    BookingSubmitResponse,
    RosterEditRequest,
    StepResult,
)
from .service import BookingService

router = APIRouter(prefix="/booking", tags=["Booking"])

booking_rate_limit = create_rate_limiter(
    limit=BOOKING_RATE_LIMIT, window_seconds=BOOKING_RATE_WINDOW_SECONDS, key_prefix="booking"
)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.get("/options", response_model=BookingOptions)
async def get_booking_options(service: BookingService = Depends(get_booking_service)):
    """Procedures with prices, time slots and blocked dates for the booking form"""
    return service.get_options()


@router.post("/advance", response_model=StepResult)
async def advance_booking(
    draft: BookingDraft, service: BookingService = Depends(get_booking_service)
):
    """Validate the current step and move forward when it passes"""
    return service.advance(draft)


@router.post("/back", response_model=StepResult)
async def back_booking(draft: BookingDraft):
    return StepResult(draft=workflow.back(draft), valid=True)


@router.post("/entries/add", response_model=StepResult)
async def add_booking_entry(draft: BookingDraft):
    return StepResult(draft=workflow.add_entry(draft), valid=True)


@router.post("/entries/remove", response_model=StepResult)
async def remove_booking_entry(data: RosterEditRequest):
    return StepResult(draft=workflow.remove_entry(data.draft, data.index), valid=True)


@router.post("/submit", response_model=BookingSubmitResponse, status_code=201)
async def submit_booking(
    draft: BookingDraft,
    _: None = Depends(booking_rate_limit),
    service: BookingService = Depends(get_booking_service),
):
    return service.submit(draft)
