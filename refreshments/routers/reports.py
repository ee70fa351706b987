# refreshments/routers/reports.py
from datetime import date

from fastapi import APIRouter, Depends

from refreshments.dependencies import get_counter
from refreshments.schemas.report import DailyReport, ReportDateUpdate
from refreshments.services.session_service import CounterSession

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/daily", response_model=DailyReport)
def daily_report(
    day: date | None = None,
    counter: CounterSession = Depends(get_counter),
):
    """
    Purchase count and revenue for one day.

    Query params (optional):
      - day: YYYY-MM-DD, defaults to the session's selected date
    """
    return counter.daily_report(day)


@router.put("/date", response_model=DailyReport)
def select_report_date(
    payload: ReportDateUpdate,
    counter: CounterSession = Depends(get_counter),
):
    """
    Change the selected report date and return its report.
    """
    counter.select_report_date(payload.day)
    return counter.daily_report()
