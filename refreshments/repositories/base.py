# refreshments/repositories/base.py
from typing import Protocol

from refreshments.schemas.catalog import ItemRead
from refreshments.schemas.purchase import PurchaseLineCreate, PurchaseRead

# Starter menu used when SEED_CATALOG is on and the catalog is empty
SEED_ITEMS: list[tuple[str, float]] = [
    ("Coffee", 25.0),
    ("Tea", 20.0),
    ("Sandwich", 80.0),
    ("Cookies", 30.0),
    ("Samosa", 15.0),
    ("Biscuits", 10.0),
    ("Chips", 20.0),
    ("Cold Drink", 25.0),
]


class CatalogRepository(Protocol):
    """
    Persistence contract for catalog items.

    - Values arrive already validated (CatalogService).
    - update / delete raise NotFoundError for unknown ids.
    - Any backend failure surfaces as PersistenceError.
    """

    def list_all(self) -> list[ItemRead]: ...

    def get(self, item_id: int) -> ItemRead | None: ...

    def create(self, name: str, price: float) -> ItemRead: ...

    def update(self, item_id: int, name: str, price: float) -> ItemRead: ...

    def delete(self, item_id: int) -> None: ...


class PurchaseRepository(Protocol):
    """
    Persistence contract for purchases.

    record() writes the header and every line, or nothing.
    """

    def list_all(self) -> list[PurchaseRead]: ...

    def record(self, total: float, lines: list[PurchaseLineCreate]) -> PurchaseRead: ...
