"""
Report aggregation over loaded appointments.

Pending requests never count. Revenue comes only from completed appointments:
(procedure_price or price or 0) x max(occurrences, 1).
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

BREAKDOWN_STATUSES = ("completed", "scheduled", "cancelled", "no-show", "rescheduled")
EXCLUDED_STATUSES = frozenset({"pending"})


def appointment_revenue(appointment) -> int:
    price = appointment.procedure_price or appointment.price or 0
    return price * max(appointment.occurrences or 1, 1)


def is_within_range(day: str, start_date: Optional[str] = None, end_date: Optional[str] = None) -> bool:
    if start_date and day < start_date:
        return False
    if end_date and day > end_date:
        return False
    return True


def filter_report_appointments(
    appointments, start_date: Optional[str] = None, end_date: Optional[str] = None
) -> list:
    return [
        a
        for a in appointments
        if a.status not in EXCLUDED_STATUSES and is_within_range(a.date or "", start_date, end_date)
    ]


def calculate_revenue(appointments) -> int:
    return sum(appointment_revenue(a) for a in appointments if a.status == "completed")


def procedure_distribution(appointments) -> dict[str, int]:
    return dict(Counter(a.procedure_type for a in appointments))


def status_distribution(appointments) -> dict[str, int]:
    return dict(Counter(a.status for a in appointments))


def month_label(day: str) -> str:
    return date.fromisoformat(day).strftime("%b %Y")


def monthly_revenue(appointments) -> list[tuple[str, int]]:
    """Completed revenue per month as ('Jan 2025', amount), oldest month first"""
    totals: dict[str, int] = {}
    for appointment in appointments:
        if appointment.status != "completed" or not appointment.date:
            continue
        month_key = appointment.date[:7]
        totals[month_key] = totals.get(month_key, 0) + appointment_revenue(appointment)
    return [(month_label(f"{key}-01"), totals[key]) for key in sorted(totals)]


@dataclass
class ReportSummary:
    start_date: Optional[str]
    end_date: Optional[str]
    total_revenue: int
    total_appointments: int
    completion_rate: float
    active_clients: int
    average_revenue: float
    status_breakdown: dict[str, int]
    procedure_distribution: dict[str, int] = field(default_factory=dict)
    status_distribution: dict[str, int] = field(default_factory=dict)
    monthly_revenue: list[tuple[str, int]] = field(default_factory=list)


def build_summary(
    appointments, start_date: Optional[str] = None, end_date: Optional[str] = None
) -> ReportSummary:
    filtered = filter_report_appointments(appointments, start_date, end_date)
    completed = [a for a in filtered if a.status == "completed"]
    total_revenue = calculate_revenue(filtered)
    total = len(filtered)
    statuses = status_distribution(filtered)

    return ReportSummary(
        start_date=start_date,
        end_date=end_date,
        total_revenue=total_revenue,
        total_appointments=total,
        completion_rate=(len(completed) / total) * 100 if total else 0.0,
        active_clients=len({a.patient_id for a in completed}),
        average_revenue=total_revenue / (len(completed) or 1),
        status_breakdown={status: statuses.get(status, 0) for status in BREAKDOWN_STATUSES},
        procedure_distribution=procedure_distribution(filtered),
        status_distribution=statuses,
        monthly_revenue=monthly_revenue(filtered),
    )


def report_filename(start_date: Optional[str] = None, end_date: Optional[str] = None) -> str:
    return f"dental-report-{start_date or '...'} to {end_date or '...'}.pdf"
