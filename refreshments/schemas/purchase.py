# refreshments/schemas/purchase.py
from datetime import datetime

from sqlmodel import SQLModel, Field


class PurchaseLineCreate(SQLModel):
    """
    Snapshot of one cart line handed to the purchase store.
    """

    item_id: int | None
    name: str
    price: float
    quantity: int = Field(gt=0)


class PurchaseItemRead(SQLModel):
    """
    Representation of a single purchase line item.
    """

    item_id: int | None
    name: str
    price: float
    quantity: int
    line_total: float


class PurchaseRead(SQLModel):
    """
    Recorded purchase including its line items.
    """

    id: int
    total: float
    purchased_at: datetime
    items: list[PurchaseItemRead]


def line_total(price: float, quantity: int) -> float:
    return price * quantity
