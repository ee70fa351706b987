# refreshments/models/catalog.py
from sqlmodel import SQLModel, Field


class CatalogItem(SQLModel, table=True):
    """
    Purchasable item on the counter menu.

    Table "items": id, name, price
    """

    __tablename__ = "items"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        min_length=1,
        index=True,
        description="Display name shown on the counter",
    )

    price: float = Field(
        ge=0,
        description="Current unit price",
    )
