from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api import reports
from src.api.db import get_db
from src.api.schemas.report import ReportResponse

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get(
    "",
    response_model=List[str],
    summary="List reports",
    description="Names of the available reporting queries, in catalogue order.",
    operation_id="reports_list",
)
def list_reports() -> List[str]:
    return list(reports.REPORTS)


@router.get(
    "/{name}",
    response_model=ReportResponse,
    summary="Run a report",
    description="Run one read-only reporting query and return its rows.",
    operation_id="reports_run",
)
def run_report(name: str, db: Session = Depends(get_db)) -> ReportResponse:
    """
    Run a named report.

    Errors:
    - 404 if the report name is unknown.
    """
    return ReportResponse(report=name, rows=reports.run_report(db, name))
