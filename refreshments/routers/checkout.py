# refreshments/routers/checkout.py
from fastapi import APIRouter, Depends, status

from refreshments.dependencies import get_counter
from refreshments.schemas.purchase import PurchaseRead
from refreshments.schemas.session import CheckoutShown, SessionView
from refreshments.services.session_service import CounterSession

router = APIRouter(prefix="/checkout", tags=["Checkout"])


@router.post("", response_model=CheckoutShown)
def request_checkout(counter: CounterSession = Depends(get_counter)):
    """
    Show the purchase confirmation for the current cart.

    - 400 if the cart is empty.
    """
    return counter.request_checkout()


@router.post("/cancel", response_model=SessionView)
def cancel_checkout(counter: CounterSession = Depends(get_counter)):
    counter.cancel_checkout()
    return counter.view()


@router.post(
    "/confirm",
    response_model=PurchaseRead,
    status_code=status.HTTP_201_CREATED,
)
def confirm_checkout(counter: CounterSession = Depends(get_counter)):
    """
    Record the purchase and clear the cart.

    - 409 unless the confirmation is showing, or while another confirm
      for this cart is still in flight.
    """
    return counter.confirm_checkout()
