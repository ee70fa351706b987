# refreshments/routers/purchases.py
from fastapi import APIRouter, Depends

from refreshments.dependencies import get_counter
from refreshments.schemas.purchase import PurchaseRead
from refreshments.services.session_service import CounterSession

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.get("", response_model=list[PurchaseRead])
def list_purchases(counter: CounterSession = Depends(get_counter)):
    """
    All recorded purchases, oldest first.
    """
    return counter.purchases
