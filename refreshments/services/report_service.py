# refreshments/services/report_service.py
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from refreshments.schemas.purchase import PurchaseRead
from refreshments.schemas.report import DailyReport


class ReportService:
    """
    Derived sales figures. Holds no state beyond the reporting timezone.
    """

    def __init__(self, timezone_name: str = "UTC"):
        self.tz = ZoneInfo(timezone_name)

    def today(self) -> date:
        return datetime.now(self.tz).date()

    def day_of(self, purchased_at: datetime) -> date:
        # SQLite hands back naive datetimes; they were stored as UTC
        if purchased_at.tzinfo is None:
            purchased_at = purchased_at.replace(tzinfo=timezone.utc)
        return purchased_at.astimezone(self.tz).date()

    def daily_report(self, purchases: list[PurchaseRead], day: date) -> DailyReport:
        matching = [p for p in purchases if self.day_of(p.purchased_at) == day]
        return DailyReport(
            day=day,
            purchase_count=len(matching),
            total_revenue=sum(p.total for p in matching),
            purchases=matching,
        )
