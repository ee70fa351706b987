# refreshments/services/purchase_service.py
import logging

from refreshments.core.errors import EmptyCartError
from refreshments.repositories.base import PurchaseRepository
from refreshments.schemas.purchase import PurchaseLineCreate, PurchaseRead
from refreshments.services.cart_service import Cart

logger = logging.getLogger(__name__)


class PurchaseRecorder:
    """
    Turns a cart into an immutable Purchase.

    Steps:
      1. Refuse an empty cart (no store call).
      2. Snapshot every line: item id, name, price, quantity.
      3. Compute the total from that snapshot.
      4. Record header + lines through the store in one call.
      5. Clear the cart, only after the store reported success.
    """

    def __init__(self, repo: PurchaseRepository):
        self.repo = repo

    def list_purchases(self) -> list[PurchaseRead]:
        return self.repo.list_all()

    def confirm(self, cart: Cart) -> PurchaseRead:
        if cart.is_empty():
            raise EmptyCartError()

        lines = [
            PurchaseLineCreate(
                item_id=line.item_id,
                name=line.name,
                price=line.price,
                quantity=line.quantity,
            )
            for line in cart.lines
        ]
        total = cart.total()

        purchase = self.repo.record(total, lines)
        cart.clear()

        logger.info(
            "Recorded purchase %s: %d lines, total %s",
            purchase.id,
            len(purchase.items),
            purchase.total,
        )
        return purchase
