# refreshments/services/cart_service.py
from dataclasses import dataclass

from refreshments.schemas.cart import CartLineRead, CartSummary
from refreshments.schemas.catalog import ItemRead
from refreshments.schemas.purchase import line_total


@dataclass
class CartLine:
    item_id: int
    name: str
    price: float
    quantity: int


class Cart:
    """
    Session-local cart. Never persisted.

    Rules:
      - adding an item already in the cart bumps its quantity
      - a line's quantity is always >= 1; setting it to 0 or less removes it
      - name/price are captured when the line is first created
    """

    def __init__(self):
        self._lines: dict[int, CartLine] = {}

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def quantity_of(self, item_id: int) -> int:
        line = self._lines.get(item_id)
        return line.quantity if line else 0

    def add(self, item: ItemRead) -> CartLine:
        line = self._lines.get(item.id)
        if line:
            line.quantity += 1
        else:
            line = CartLine(item_id=item.id, name=item.name, price=item.price, quantity=1)
            self._lines[item.id] = line
        return line

    def set_quantity(self, item_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove(item_id)
            return
        # Unknown ids are ignored, same as remove()
        line = self._lines.get(item_id)
        if line:
            line.quantity = quantity

    def remove(self, item_id: int) -> None:
        self._lines.pop(item_id, None)

    def total(self) -> float:
        return sum(line_total(line.price, line.quantity) for line in self._lines.values())

    def clear(self) -> None:
        self._lines.clear()

    def summary(self) -> CartSummary:
        items = [
            CartLineRead(
                item_id=line.item_id,
                name=line.name,
                price=line.price,
                quantity=line.quantity,
                line_total=line_total(line.price, line.quantity),
            )
            for line in self._lines.values()
        ]
        return CartSummary(
            items=items,
            total_quantity=sum(line.quantity for line in self._lines.values()),
            total_price=self.total(),
        )
