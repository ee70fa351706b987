# refreshments/repositories/supabase_store.py
import logging
from datetime import datetime, timezone

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from refreshments.core.errors import NotFoundError, PersistenceError
from refreshments.repositories.base import SEED_ITEMS
from refreshments.schemas.catalog import ItemRead
from refreshments.schemas.purchase import (
    PurchaseItemRead,
    PurchaseLineCreate,
    PurchaseRead,
    line_total,
)

logger = logging.getLogger(__name__)

ITEMS_TABLE = "items"
PURCHASES_TABLE = "purchases"
PURCHASE_ITEMS_TABLE = "purchase_items"

# Errors the Supabase client raises for failed or unreachable requests
CLIENT_ERRORS = (APIError, httpx.HTTPError)


class SupabaseCatalogRepository:
    """
    Catalog items through the Supabase REST (PostgREST) client.
    """

    def __init__(self, client: Client):
        self.client = client

    def seed_if_empty(self) -> None:
        if self.list_all():
            return
        try:
            self.client.table(ITEMS_TABLE).insert(
                [{"name": name, "price": price} for name, price in SEED_ITEMS]
            ).execute()
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not seed catalog: {e}") from e
        logger.info("Seeded %d starter items", len(SEED_ITEMS))

    def list_all(self) -> list[ItemRead]:
        try:
            res = self.client.table(ITEMS_TABLE).select("id, name, price").order("id").execute()
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not load catalog: {e}") from e
        return [ItemRead.model_validate(row) for row in res.data]

    def get(self, item_id: int) -> ItemRead | None:
        try:
            res = (
                self.client.table(ITEMS_TABLE)
                .select("id, name, price")
                .eq("id", item_id)
                .execute()
            )
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not load item {item_id}: {e}") from e
        return ItemRead.model_validate(res.data[0]) if res.data else None

    def create(self, name: str, price: float) -> ItemRead:
        try:
            res = self.client.table(ITEMS_TABLE).insert({"name": name, "price": price}).execute()
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not add item: {e}") from e
        if not res.data:
            raise PersistenceError("Could not add item: store returned no row")
        return ItemRead.model_validate(res.data[0])

    def update(self, item_id: int, name: str, price: float) -> ItemRead:
        try:
            res = (
                self.client.table(ITEMS_TABLE)
                .update({"name": name, "price": price})
                .eq("id", item_id)
                .execute()
            )
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not update item {item_id}: {e}") from e
        # PostgREST returns the affected rows; none means the id is unknown
        if not res.data:
            raise NotFoundError(item_id)
        return ItemRead.model_validate(res.data[0])

    def delete(self, item_id: int) -> None:
        try:
            res = self.client.table(ITEMS_TABLE).delete().eq("id", item_id).execute()
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not delete item {item_id}: {e}") from e
        if not res.data:
            raise NotFoundError(item_id)


class SupabasePurchaseRepository:
    """
    Purchases through the Supabase REST client.

    PostgREST has no multi-table transaction, so record():
      1. inserts the header,
      2. inserts all lines in one bulk request,
      3. on line failure deletes the header and raises PersistenceError.

    A header left behind by a failed delete has no lines; list_all()
    skips such headers so they never count as purchases.
    """

    def __init__(self, client: Client):
        self.client = client

    def list_all(self) -> list[PurchaseRead]:
        try:
            res = (
                self.client.table(PURCHASES_TABLE)
                .select("id, total, purchased_at, purchase_items(item_id, name, price, quantity)")
                .order("purchased_at")
                .execute()
            )
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not load purchases: {e}") from e
        purchases: list[PurchaseRead] = []
        for row in res.data:
            lines = row.get(PURCHASE_ITEMS_TABLE) or []
            if not lines:
                logger.warning("Skipping purchase %s: header has no line items", row["id"])
                continue
            purchases.append(self._to_read(row, lines))
        return purchases

    def record(self, total: float, lines: list[PurchaseLineCreate]) -> PurchaseRead:
        try:
            res = (
                self.client.table(PURCHASES_TABLE)
                .insert(
                    {
                        "total": total,
                        "purchased_at": datetime.now(timezone.utc).isoformat(),
                    }
                )
                .execute()
            )
        except CLIENT_ERRORS as e:
            raise PersistenceError(f"Could not record purchase: {e}") from e
        if not res.data:
            raise PersistenceError("Could not record purchase: store returned no row")
        header = res.data[0]

        line_rows = [
            {
                "purchase_id": header["id"],
                "item_id": line.item_id,
                "name": line.name,
                "price": line.price,
                "quantity": line.quantity,
            }
            for line in lines
        ]
        try:
            res = self.client.table(PURCHASE_ITEMS_TABLE).insert(line_rows).execute()
        except CLIENT_ERRORS as e:
            self._discard_header(header["id"])
            raise PersistenceError(f"Could not record purchase items: {e}") from e

        return self._to_read(header, res.data or line_rows)

    def _discard_header(self, purchase_id: int) -> None:
        try:
            self.client.table(PURCHASES_TABLE).delete().eq("id", purchase_id).execute()
        except CLIENT_ERRORS:
            logger.exception("Orphaned purchase header %s could not be removed", purchase_id)

    @staticmethod
    def _to_read(header: dict, lines: list[dict]) -> PurchaseRead:
        # pydantic parses the ISO string, whatever its fractional digits
        return PurchaseRead(
            id=header["id"],
            total=header["total"],
            purchased_at=header["purchased_at"],
            items=[
                PurchaseItemRead(
                    item_id=line.get("item_id"),
                    name=line["name"],
                    price=line["price"],
                    quantity=line["quantity"],
                    line_total=line_total(line["price"], line["quantity"]),
                )
                for line in lines
            ],
        )
