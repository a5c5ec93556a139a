"""
Financial report PDF
Multi-page clinic report with metrics tables, a monthly revenue bar chart and a
procedure pie chart
"""

import io
import logging
from datetime import datetime

from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.charts.piecharts import Pie
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from ... import config
from .aggregator import ReportSummary

logger = logging.getLogger(__name__)

# Helvetica has no peso glyph
CURRENCY = "PHP"

CHART_COLORS = [
    colors.HexColor("#0d9488"),
    colors.HexColor("#3b82f6"),
    colors.HexColor("#f59e0b"),
    colors.HexColor("#ef4444"),
    colors.HexColor("#8b5cf6"),
    colors.HexColor("#10b981"),
    colors.HexColor("#ec4899"),
    colors.HexColor("#64748b"),
]


def format_currency(amount) -> str:
    return f"{CURRENCY} {amount:,}"


def format_status(status: str) -> str:
    return status[:1].upper() + status[1:].replace("-", " ", 1)


class ReportPDFGenerator:
    """Render a ReportSummary as a PDF document"""

    def __init__(self, summary: ReportSummary, clinic_name: str = None):
        self.summary = summary
        self.clinic_name = clinic_name or config.CLINIC_NAME

        self.page_width, self.page_height = letter
        self.margin = 0.75 * inch
        self.content_width = self.page_width - (2 * self.margin)

        self.brand_color = colors.HexColor("#0d9488")
        self.dark_gray = colors.HexColor("#1e293b")
        self.light_gray = colors.HexColor("#f5f5f5")

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "ReportTitle",
            parent=styles["Heading1"],
            fontSize=24,
            textColor=self.brand_color,
            spaceAfter=6,
        )
        self.subtitle_style = ParagraphStyle(
            "ReportSubtitle", parent=styles["Heading2"], fontSize=16, textColor=colors.black
        )
        self.heading_style = ParagraphStyle(
            "ReportHeading",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=self.dark_gray,
            spaceBefore=16,
            spaceAfter=8,
        )
        self.meta_style = ParagraphStyle(
            "ReportMeta", parent=styles["Normal"], fontSize=10, textColor=colors.HexColor("#646464")
        )
        self.body_style = ParagraphStyle(
            "ReportBody", parent=styles["Normal"], fontSize=12, textColor=self.dark_gray, spaceAfter=6
        )

    def generate(self) -> bytes:
        """Generate PDF and return bytes"""
        logger.info(
            f"📄 Generating report PDF for {self.summary.start_date or '...'} to {self.summary.end_date or '...'}"
        )
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin,
            title=f"{self.clinic_name} Financial Report",
            author=self.clinic_name,
        )

        story = []
        story.extend(self._title_block())
        story.extend(self._metrics_table())
        story.extend(self._status_table())

        # Charts are optional; a failed chart is logged and left out
        try:
            story.extend(self._revenue_chart())
        except Exception as e:
            logger.error(f"❌ Error rendering revenue chart: {str(e)}")
        try:
            story.extend(self._procedure_chart())
        except Exception as e:
            logger.error(f"❌ Error rendering procedure chart: {str(e)}")

        story.append(PageBreak())
        story.extend(self._procedure_details())

        doc.build(story)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"✅ Report PDF generated ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _title_block(self) -> list:
        period = (
            f"Report Period: {self.summary.start_date or 'Start Date'} "
            f"to {self.summary.end_date or 'End Date'}"
        )
        generated = f"Generated: {datetime.now().strftime('%B %d, %Y')}"
        rule = Table([[""]], colWidths=[self.content_width], rowHeights=[2])
        rule.setStyle(TableStyle([("LINEBELOW", (0, 0), (-1, -1), 1, colors.HexColor("#c8c8c8"))]))
        return [
            Paragraph(self.clinic_name, self.title_style),
            Paragraph("Financial Report", self.subtitle_style),
            Spacer(1, 0.1 * inch),
            Paragraph(period, self.meta_style),
            Paragraph(generated, self.meta_style),
            rule,
            Spacer(1, 0.2 * inch),
        ]

    def _striped_table(self, rows: list, header: bool = False) -> Table:
        table = Table(rows, colWidths=[self.content_width * 0.7, self.content_width * 0.3])
        style = [
            ("FONT", (0, 0), (-1, -1), "Helvetica", 10),
            ("TEXTCOLOR", (0, 0), (-1, -1), self.dark_gray),
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
        ]
        if header:
            style.append(("FONT", (0, 0), (-1, 0), "Helvetica-Bold", 10))
        first_body_row = 1 if header else 0
        for row_index in range(first_body_row, len(rows)):
            if (row_index - first_body_row) % 2 == 0:
                style.append(("BACKGROUND", (0, row_index), (-1, row_index), self.light_gray))
        table.setStyle(TableStyle(style))
        return table

    def _metrics_table(self) -> list:
        rows = [
            ["Total Revenue", format_currency(self.summary.total_revenue)],
            ["Total Appointments", str(self.summary.total_appointments)],
            ["Completion Rate", f"{self.summary.completion_rate:.1f}%"],
            ["Active Clients", str(self.summary.active_clients)],
        ]
        return [Paragraph("Key Performance Indicators", self.heading_style), self._striped_table(rows)]

    def _status_table(self) -> list:
        rows = [["Status", "Count"]]
        rows.extend(
            [format_status(status), str(count)]
            for status, count in self.summary.status_breakdown.items()
        )
        return [
            Paragraph("Appointment Status Breakdown", self.heading_style),
            self._striped_table(rows, header=True),
        ]

    def _revenue_chart(self) -> list:
        series = self.summary.monthly_revenue
        if not series:
            return []

        drawing = Drawing(self.content_width, 220)
        chart = VerticalBarChart()
        chart.x = 50
        chart.y = 40
        chart.width = self.content_width - 70
        chart.height = 160
        chart.data = [[amount for _, amount in series]]
        chart.categoryAxis.categoryNames = [label for label, _ in series]
        chart.categoryAxis.labels.fontSize = 8
        chart.valueAxis.valueMin = 0
        chart.valueAxis.labels.fontSize = 8
        chart.bars[0].fillColor = self.brand_color
        drawing.add(chart)

        return [PageBreak(), Paragraph("Revenue Overview", self.heading_style), drawing]

    def _procedure_chart(self) -> list:
        distribution = self.summary.procedure_distribution
        if not distribution:
            return []

        size = min(self.content_width, 260)
        drawing = Drawing(self.content_width, size + 20)
        pie = Pie()
        pie.x = (self.content_width - size + 80) / 2
        pie.y = 10
        pie.width = size - 80
        pie.height = size - 80
        pie.data = list(distribution.values())
        pie.labels = [f"{name} ({count})" for name, count in distribution.items()]
        pie.slices.strokeWidth = 0.5
        pie.slices.fontSize = 8
        for index in range(len(pie.data)):
            pie.slices[index].fillColor = CHART_COLORS[index % len(CHART_COLORS)]
        drawing.add(pie)

        return [Paragraph("Procedure Distribution", self.heading_style), drawing]

    def _procedure_details(self) -> list:
        story = [Paragraph("Procedure Distribution Details:", self.heading_style)]
        if not self.summary.procedure_distribution:
            story.append(Paragraph("No appointments in this period.", self.body_style))
        for name, count in self.summary.procedure_distribution.items():
            story.append(Paragraph(f"{name}: {count}", self.body_style))
        return story
