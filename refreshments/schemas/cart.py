# refreshments/schemas/cart.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class CartItemAdd(SQLModel):
    """
    Payload for adding one unit of a catalog item to the cart.
    """

    model_config = ConfigDict(extra="forbid")

    item_id: int


class CartQuantityUpdate(SQLModel):
    """
    Payload for setting a line quantity. Zero or less removes the line.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int


class CartLineRead(SQLModel):
    """
    One cart line, with the price captured when it was first added.
    """

    item_id: int
    name: str
    price: float
    quantity: int = Field(ge=1)
    line_total: float


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartLineRead]
    total_quantity: int
    total_price: float
