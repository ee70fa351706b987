# refreshments/schemas/catalog.py
from pydantic import ConfigDict, StrictFloat, StrictInt
from sqlmodel import SQLModel


class ItemRead(SQLModel):
    """
    Catalog item as seen by every view.
    """

    id: int
    name: str
    price: float


class ItemCreate(SQLModel):
    """
    Payload for adding a catalog item.

    price may arrive as raw form text ("25", "12.50"); parsing and range
    checks happen in CatalogService so every store gets the same rules.
    Booleans are refused here, before any coercion to 1.0 / 0.0.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    price: StrictInt | StrictFloat | str


class ItemUpdate(SQLModel):
    """
    Partial update payload for catalog items.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    price: StrictInt | StrictFloat | str | None = None


class CatalogSummary(SQLModel):
    """
    Quick stats shown above the item grid.
    """

    item_count: int
    min_price: float | None
    max_price: float | None
