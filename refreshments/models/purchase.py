# refreshments/models/purchase.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Purchase(SQLModel, table=True):
    """
    Header row for a confirmed cart.

    Table "purchases": id, total, purchased_at
    """

    __tablename__ = "purchases"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    # Sum of price * quantity over the lines at confirmation time
    total: float = Field(
        ge=0,
        description="Purchase total",
    )

    purchased_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Confirmation timestamp (UTC)",
    )


class PurchaseItem(SQLModel, table=True):
    """
    Line item inside a purchase.

    Table "purchase_items": purchase_id, item_id, quantity, plus a
    snapshot of the item's name and price when it was bought. item_id is
    not a foreign key: catalog items may be deleted while history stays.
    """

    __tablename__ = "purchase_items"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    purchase_id: int = Field(
        foreign_key="purchases.id",
        index=True,
    )

    item_id: int | None = Field(
        default=None,
        index=True,
    )

    name: str = Field(
        description="Item name at time of purchase",
    )

    price: float = Field(
        ge=0,
        description="Unit price at time of purchase",
    )

    quantity: int = Field(
        gt=0,
        description="Quantity bought (>=1)",
    )
