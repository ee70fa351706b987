# refreshments/schemas/report.py
from datetime import date

from pydantic import ConfigDict
from sqlmodel import SQLModel

from refreshments.schemas.purchase import PurchaseRead


class DailyReport(SQLModel):
    """
    Sales for one calendar day.
    """

    day: date
    purchase_count: int
    total_revenue: float
    purchases: list[PurchaseRead]


class ReportDateUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    day: date
