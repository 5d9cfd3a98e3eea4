# pdf_export.py
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from services import report_summary
from utils import format_currency, monthly_report_to_dataframe

logger = logging.getLogger(__name__)

BORDER_COLOR = colors.HexColor("#C7CCD6")
HEADER_COLOR = colors.HexColor("#F5F5F7")


def report_heading(year: int, title: str = "Earnings Report") -> str:
    return f"{title}: {year}"


def report_table_rows(report: Dict[str, float]) -> list[list[str]]:
    """Header plus one formatted row per month."""
    df = monthly_report_to_dataframe(report)
    return [list(df.columns)] + [
        [month, format_currency(earnings), f"{share:.1f}%"]
        for month, earnings, share in df.itertuples(index=False)
    ]


def annual_report_pdf(report: Dict[str, float], year: int, title: str = "Earnings Report") -> bytes:
    """Month / Earnings / % of Annual table with a summary line underneath."""
    rows = report_table_rows(report)

    summary = report_summary(report)
    label, value = summary.highest_month
    highest = f"{label} ({format_currency(value)})" if value > 0 else "No data"
    summary_text = (
        f"Total {year}: {format_currency(summary.total_earnings)}; "
        f"Average monthly: {format_currency(summary.average_monthly)}; "
        f"Highest month: {highest}"
    )

    styles = getSampleStyleSheet()
    table = Table(rows, repeatRows=1, hAlign="CENTER")
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("GRID", (0, 0), (-1, -1), 0.25, BORDER_COLOR),
    ]))

    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4)
    doc.build([
        Paragraph(report_heading(year, title), styles["Title"]),
        table,
        Spacer(1, 12),
        Paragraph(summary_text, styles["Normal"]),
    ])
    return buf.getvalue()


def save_annual_report(report: Dict[str, float], year: int, reports_dir: Path) -> Path:
    reports_dir.mkdir(parents=True, exist_ok=True)
    target = reports_dir / f"report_{year}.pdf"
    target.write_bytes(annual_report_pdf(report, year))
    logger.info("Wrote annual report %s", target)
    return target
