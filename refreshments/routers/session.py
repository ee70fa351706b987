# refreshments/routers/session.py
from fastapi import APIRouter, Depends

from refreshments.dependencies import get_counter
from refreshments.schemas.session import SessionView, TabUpdate
from refreshments.services.session_service import CounterSession

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("", response_model=SessionView)
def get_session_view(counter: CounterSession = Depends(get_counter)):
    """
    Current screen state: tab, manage form, checkout modal, report date
    and the cart.
    """
    return counter.view()


@router.put("/tab", response_model=SessionView)
def select_tab(
    payload: TabUpdate,
    counter: CounterSession = Depends(get_counter),
):
    """
    Switch between purchase / manage / reports.

    - 409 while the checkout confirmation is open.
    """
    counter.select_tab(payload.tab)
    return counter.view()
