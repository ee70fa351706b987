# refreshments/repositories/memory.py
import itertools
from datetime import datetime, timezone

from refreshments.core.errors import NotFoundError
from refreshments.repositories.base import SEED_ITEMS
from refreshments.schemas.catalog import ItemRead
from refreshments.schemas.purchase import (
    PurchaseItemRead,
    PurchaseLineCreate,
    PurchaseRead,
    line_total,
)


class MemoryCatalogRepository:
    """
    Process-local catalog. Ids come from a counter and are never reused.
    """

    def __init__(self, seed: bool = False):
        self._items: dict[int, ItemRead] = {}
        self._ids = itertools.count(1)
        if seed:
            for name, price in SEED_ITEMS:
                self.create(name, price)

    def list_all(self) -> list[ItemRead]:
        return [item.model_copy() for item in self._items.values()]

    def get(self, item_id: int) -> ItemRead | None:
        item = self._items.get(item_id)
        return item.model_copy() if item else None

    def create(self, name: str, price: float) -> ItemRead:
        item = ItemRead(id=next(self._ids), name=name, price=price)
        self._items[item.id] = item
        return item.model_copy()

    def update(self, item_id: int, name: str, price: float) -> ItemRead:
        if item_id not in self._items:
            raise NotFoundError(item_id)
        item = ItemRead(id=item_id, name=name, price=price)
        self._items[item_id] = item
        return item.model_copy()

    def delete(self, item_id: int) -> None:
        if self._items.pop(item_id, None) is None:
            raise NotFoundError(item_id)


class MemoryPurchaseRepository:
    """
    Process-local purchase history. Records are immutable once stored.
    """

    def __init__(self):
        self._purchases: list[PurchaseRead] = []
        self._ids = itertools.count(1)

    def list_all(self) -> list[PurchaseRead]:
        return [p.model_copy(deep=True) for p in self._purchases]

    def record(self, total: float, lines: list[PurchaseLineCreate]) -> PurchaseRead:
        purchase = PurchaseRead(
            id=next(self._ids),
            total=total,
            purchased_at=datetime.now(timezone.utc),
            items=[
                PurchaseItemRead(
                    item_id=line.item_id,
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    line_total=line_total(line.price, line.quantity),
                )
                for line in lines
            ],
        )
        self._purchases.append(purchase)
        return purchase.model_copy(deep=True)
