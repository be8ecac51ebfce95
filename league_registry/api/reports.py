"""
Report API endpoints.

GET /reports/{kind}?format=json|csv|pdf&team_id=1&team_id=2&status=active|all

The same projection feeds every format, so a JSON report and a
CSV report for the same data have the same rows.
"""

from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from league_registry.api.deps import http_error, require_operator
from league_registry.errors import InvalidReportFormat, LeagueError
from league_registry.models.base import get_db
from league_registry.services.report_export import roster_to_pdf, to_csv
from league_registry.services.report_projector import ReportProjector
from league_registry.schemas.report import (
    ContactReportRow,
    ReportFormat,
    ReportKind,
    ReportResponse,
    RosterReportRow,
    RosterScope,
    TeamSummaryRow,
)

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    dependencies=[Depends(require_operator)],
)

ROW_MODELS = {
    ReportKind.ROSTER: RosterReportRow,
    ReportKind.PLAYER_CONTACT: ContactReportRow,
    ReportKind.TEAM_SUMMARY: TeamSummaryRow,
}

# PDF is only produced for rosters
SUPPORTED_FORMATS = {
    ReportKind.ROSTER: {ReportFormat.JSON, ReportFormat.CSV, ReportFormat.PDF},
    ReportKind.PLAYER_CONTACT: {ReportFormat.JSON, ReportFormat.CSV},
    ReportKind.TEAM_SUMMARY: {ReportFormat.JSON, ReportFormat.CSV},
}


def _parse_format(kind: ReportKind, value: str) -> ReportFormat:
    try:
        report_format = ReportFormat(value.lower())
    except ValueError:
        report_format = None
    if report_format not in SUPPORTED_FORMATS[kind]:
        allowed = sorted(f.value for f in SUPPORTED_FORMATS[kind])
        raise InvalidReportFormat(
            f"Format '{value}' is not available for {kind.value} reports",
            allowed_formats=allowed,
        )
    return report_format


@router.get("/{kind}")
def get_report(
    kind: ReportKind,
    format: str = "json",
    team_id: list[int] = Query(default=[]),
    status: RosterScope = RosterScope.ACTIVE,
    db: Session = Depends(get_db),
):
    """
    Generate a report.

    status only applies to roster reports. Unknown team ids in
    the filter are a 404 rather than an empty report.
    """
    projector = ReportProjector(db)
    today = date.today()
    try:
        report_format = _parse_format(kind, format)
        if kind == ReportKind.ROSTER:
            rows = projector.roster(team_id, status, today)
        elif kind == ReportKind.PLAYER_CONTACT:
            rows = projector.contacts(team_id)
        else:
            rows = projector.team_summary(team_id, today)
    except LeagueError as e:
        raise http_error(e)

    generated_at = datetime.utcnow()
    stamp = generated_at.strftime("%Y%m%d-%H%M%S")
    filename = f"{kind.value}-report-{stamp}"

    if report_format == ReportFormat.CSV:
        columns = list(ROW_MODELS[kind].model_fields)
        return Response(
            content=to_csv(rows, columns),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
        )
    if report_format == ReportFormat.PDF:
        return Response(
            content=roster_to_pdf(rows, generated_at=generated_at),
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}.pdf"'},
        )
    return ReportResponse(
        report_type=kind,
        generated_at=generated_at,
        row_count=len(rows),
        rows=[row.model_dump(mode="json") for row in rows],
    )
