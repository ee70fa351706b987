# refreshments/services/catalog_service.py
import logging
import math

from refreshments.core.errors import NotFoundError, ValidationError
from refreshments.repositories.base import CatalogRepository
from refreshments.schemas.catalog import CatalogSummary, ItemRead

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Business logic for catalog items.

    Responsibilities:
      - normalize and validate name / price before they reach any store
      - delegate persistence to whichever CatalogRepository is injected
    """

    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def parse_name(raw: str | None) -> str:
        name = (raw or "").strip()
        if not name:
            raise ValidationError("Item name cannot be empty")
        return name

    @staticmethod
    def parse_price(raw: float | int | str | None) -> float:
        """
        Accept a number or numeric form text; reject blanks, NaN/inf and
        negatives.
        """
        if raw is None or isinstance(raw, bool):
            raise ValidationError("Price is required")
        if isinstance(raw, str):
            raw = raw.strip()
            if not raw:
                raise ValidationError("Price is required")
        try:
            price = float(raw)
        except (TypeError, ValueError):
            raise ValidationError(f"Price is not a number: {raw!r}")
        if not math.isfinite(price):
            raise ValidationError(f"Price is not a number: {raw!r}")
        if price < 0:
            raise ValidationError("Price cannot be negative")
        return price

    # ----- Items -----

    def list_items(self) -> list[ItemRead]:
        return self.repo.list_all()

    def get_item(self, item_id: int) -> ItemRead:
        item = self.repo.get(item_id)
        if not item:
            raise NotFoundError(item_id)
        return item

    def create_item(self, name: str | None, price: float | str | None) -> ItemRead:
        item = self.repo.create(self.parse_name(name), self.parse_price(price))
        logger.info("Added item %s (%s @ %s)", item.id, item.name, item.price)
        return item

    def update_item(
        self,
        item_id: int,
        name: str | None = None,
        price: float | str | None = None,
    ) -> ItemRead:
        """
        Update an item. Fields left as None keep their current value.
        """
        if name is None or price is None:
            current = self.get_item(item_id)
            name = current.name if name is None else name
            price = current.price if price is None else price

        item = self.repo.update(item_id, self.parse_name(name), self.parse_price(price))
        logger.info("Updated item %s (%s @ %s)", item.id, item.name, item.price)
        return item

    def delete_item(self, item_id: int) -> None:
        self.repo.delete(item_id)
        logger.info("Deleted item %s", item_id)

    @staticmethod
    def summarize(items: list[ItemRead]) -> CatalogSummary:
        prices = [item.price for item in items]
        return CatalogSummary(
            item_count=len(items),
            min_price=min(prices) if prices else None,
            max_price=max(prices) if prices else None,
        )
