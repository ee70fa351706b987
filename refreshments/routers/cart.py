# refreshments/routers/cart.py
from fastapi import APIRouter, Depends

from refreshments.dependencies import get_counter
from refreshments.schemas.cart import CartItemAdd, CartQuantityUpdate, CartSummary
from refreshments.services.session_service import CounterSession

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartSummary)
def get_cart(counter: CounterSession = Depends(get_counter)):
    """
    Get the cart summary.
    """
    return counter.view().cart


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemAdd,
    counter: CounterSession = Depends(get_counter),
):
    """
    Add one unit of a catalog item.

    Returns the updated cart summary.
    """
    counter.add_to_cart(payload.item_id)
    return counter.view().cart


@router.patch("/{item_id}", response_model=CartSummary)
def update_cart_item(
    item_id: int,
    payload: CartQuantityUpdate,
    counter: CounterSession = Depends(get_counter),
):
    """
    Set the quantity of a line. Zero or less removes it.
    """
    counter.set_cart_quantity(item_id, payload.quantity)
    return counter.view().cart


@router.delete("/{item_id}", response_model=CartSummary)
def remove_cart_item(
    item_id: int,
    counter: CounterSession = Depends(get_counter),
):
    counter.remove_from_cart(item_id)
    return counter.view().cart


@router.delete("", response_model=CartSummary)
def clear_cart(counter: CounterSession = Depends(get_counter)):
    """
    Clear the entire cart.
    """
    counter.clear_cart()
    return counter.view().cart
