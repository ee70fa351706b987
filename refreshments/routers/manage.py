# refreshments/routers/manage.py
from fastapi import APIRouter, Body, Depends

from refreshments.dependencies import get_counter
from refreshments.schemas.catalog import ItemRead
from refreshments.schemas.session import (
    Adding,
    DraftUpdate,
    Editing,
    ItemDraft,
    SessionView,
)
from refreshments.services.session_service import CounterSession

router = APIRouter(prefix="/manage", tags=["Manage"])


@router.post("/add", response_model=Adding)
def open_add_form(
    draft: ItemDraft | None = Body(default=None),
    counter: CounterSession = Depends(get_counter),
):
    """
    Open the add-item form (closes an edit in progress).
    """
    return counter.open_add_form(draft)


@router.post("/edit/{item_id}", response_model=Editing)
def start_edit(
    item_id: int,
    counter: CounterSession = Depends(get_counter),
):
    """
    Open the edit form prefilled with the item's current values.
    """
    return counter.start_edit(item_id)


@router.patch("/draft", response_model=Adding | Editing)
def update_draft(
    payload: DraftUpdate,
    counter: CounterSession = Depends(get_counter),
):
    """
    Change the open form's text fields.
    """
    return counter.update_draft(payload.name, payload.price)


@router.post("/submit", response_model=ItemRead)
def submit_form(counter: CounterSession = Depends(get_counter)):
    """
    Save the open form.

    - On failure the form stays open with its draft.
    """
    return counter.submit_form()


@router.post("/cancel", response_model=SessionView)
def cancel_form(counter: CounterSession = Depends(get_counter)):
    counter.cancel_form()
    return counter.view()
