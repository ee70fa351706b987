# refreshments/schemas/session.py
"""
Screen state for the counter, as tagged variants.

Each variant carries only the data that makes sense in that state, so
combinations like "editing while the add form is open" cannot be built.
"""
from datetime import date
from typing import Annotated, Literal, Union

from pydantic import ConfigDict
from pydantic import Field as UnionField
from sqlmodel import SQLModel, Field

from refreshments.schemas.cart import CartSummary

Tab = Literal["purchase", "manage", "reports"]


class ItemDraft(SQLModel):
    """
    Raw form text for the add / edit item form.
    """

    name: str = ""
    price: str = ""


# ----- Manage tab -----


class Browsing(SQLModel):
    mode: Literal["browsing"] = "browsing"


class Adding(SQLModel):
    mode: Literal["adding"] = "adding"
    draft: ItemDraft = Field(default_factory=ItemDraft)


class Editing(SQLModel):
    mode: Literal["editing"] = "editing"
    item_id: int
    draft: ItemDraft


ManageState = Annotated[Union[Browsing, Adding, Editing], UnionField(discriminator="mode")]


# ----- Checkout confirmation modal -----


class CheckoutHidden(SQLModel):
    status: Literal["hidden"] = "hidden"


class CheckoutShown(SQLModel):
    status: Literal["shown"] = "shown"
    total: float


class CheckoutSubmitting(SQLModel):
    status: Literal["submitting"] = "submitting"
    total: float


CheckoutState = Annotated[
    Union[CheckoutHidden, CheckoutShown, CheckoutSubmitting],
    UnionField(discriminator="status"),
]


# ----- Payloads / views -----


class TabUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    tab: Tab


class DraftUpdate(SQLModel):
    """
    Partial update of the open form's text fields.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    price: str | None = None


class SessionView(SQLModel):
    """
    Everything a front-end needs to render the current screen.
    """

    tab: Tab
    manage: ManageState
    checkout: CheckoutState
    selected_date: date
    cart: CartSummary
