"""
Report encoders.

CSV uses the csv module's minimal quoting: a field is wrapped in
double quotes only when it contains a comma, a quote or a line
break, and embedded quotes are doubled. PDF output is a single
landscape table built with ReportLab and is offered for roster
reports only.
"""

import csv
import io
from datetime import datetime

from pydantic import BaseModel
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from league_registry.schemas.report import RosterReportRow

ROSTER_PDF_COLUMNS = [
    ("team_name", "Team"),
    ("player_name", "Player"),
    ("jersey_number", "#"),
    ("position", "Position"),
    ("start_date", "Start"),
    ("end_date", "End"),
    ("status", "Status"),
    ("player_email", "Email"),
]


def _cell(value) -> str:
    return "" if value is None else str(value)


def to_csv(rows: list[BaseModel], columns: list[str]) -> str:
    """Header row of column names, then one line per row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        data = row.model_dump(mode="json")
        writer.writerow([_cell(data.get(column)) for column in columns])
    return buffer.getvalue()


def roster_to_pdf(
    rows: list[RosterReportRow],
    title: str = "Roster Report",
    generated_at: datetime | None = None,
) -> bytes:
    generated_at = generated_at or datetime.utcnow()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=12 * mm,
        rightMargin=12 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=title,
    )
    styles = getSampleStyleSheet()

    table_data = [[label for _, label in ROSTER_PDF_COLUMNS]]
    for row in rows:
        data = row.model_dump(mode="json")
        table_data.append([_cell(data.get(key)) for key, _ in ROSTER_PDF_COLUMNS])

    table = Table(table_data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f3a5f")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#eef2f7")]),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))

    story = [
        Paragraph(title, styles["Title"]),
        Paragraph(
            f"Generated {generated_at:%Y-%m-%d %H:%M} UTC, {len(rows)} players",
            styles["Normal"],
        ),
        Spacer(1, 6 * mm),
        table,
    ]
    doc.build(story)
    return buffer.getvalue()
