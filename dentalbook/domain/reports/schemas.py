"""Reports domain schemas"""

from typing import Optional

from pydantic import BaseModel


class ChartPoint(BaseModel):
    name: str
    value: int


class MonthlyRevenuePoint(BaseModel):
    name: str
    revenue: int


class ReportSummaryResponse(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    totalRevenue: int
    totalAppointments: int
    completionRate: float
    activeClients: int
    averageRevenue: float
    statusBreakdown: dict[str, int]
    procedureDistribution: list[ChartPoint]
    statusDistribution: list[ChartPoint]
    monthlyRevenue: list[MonthlyRevenuePoint]

    @classmethod
    def from_summary(cls, summary) -> "ReportSummaryResponse":
        return cls(
            startDate=summary.start_date,
            endDate=summary.end_date,
            totalRevenue=summary.total_revenue,
            totalAppointments=summary.total_appointments,
            completionRate=round(summary.completion_rate, 1),
            activeClients=summary.active_clients,
            averageRevenue=round(summary.average_revenue, 2),
            statusBreakdown=summary.status_breakdown,
            procedureDistribution=[
                ChartPoint(name=name, value=value)
                for name, value in summary.procedure_distribution.items()
            ],
            statusDistribution=[
                ChartPoint(name=name, value=value)
                for name, value in summary.status_distribution.items()
            ],
            monthlyRevenue=[
                MonthlyRevenuePoint(name=name, revenue=revenue)
                for name, revenue in summary.monthly_revenue
            ],
        )
