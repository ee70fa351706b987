# refreshments/repositories/sql.py
import logging
from collections import defaultdict

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from refreshments.core.errors import NotFoundError, PersistenceError
from refreshments.models.catalog import CatalogItem
from refreshments.models.purchase import Purchase, PurchaseItem
from refreshments.repositories.base import SEED_ITEMS
from refreshments.schemas.catalog import ItemRead
from refreshments.schemas.purchase import (
    PurchaseItemRead,
    PurchaseLineCreate,
    PurchaseRead,
    line_total,
)

logger = logging.getLogger(__name__)


class SqlCatalogRepository:
    """
    Catalog items in the "items" table.

    - One short-lived Session per call.
    - Driver errors are re-raised as PersistenceError.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def seed_if_empty(self) -> None:
        try:
            with Session(self.engine) as session:
                count = session.exec(select(func.count()).select_from(CatalogItem)).one()
                if count:
                    return
                session.add_all(
                    [CatalogItem(name=name, price=price) for name, price in SEED_ITEMS]
                )
                session.commit()
                logger.info("Seeded %d starter items", len(SEED_ITEMS))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not seed catalog: {e}") from e

    def list_all(self) -> list[ItemRead]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(select(CatalogItem).order_by(CatalogItem.id)).all()
                return [ItemRead.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not load catalog: {e}") from e

    def get(self, item_id: int) -> ItemRead | None:
        try:
            with Session(self.engine) as session:
                row = session.get(CatalogItem, item_id)
                return ItemRead.model_validate(row) if row else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not load item {item_id}: {e}") from e

    def create(self, name: str, price: float) -> ItemRead:
        try:
            with Session(self.engine) as session:
                row = CatalogItem(name=name, price=price)
                session.add(row)
                session.commit()
                session.refresh(row)
                return ItemRead.model_validate(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not add item: {e}") from e

    def update(self, item_id: int, name: str, price: float) -> ItemRead:
        try:
            with Session(self.engine) as session:
                row = session.get(CatalogItem, item_id)
                if not row:
                    raise NotFoundError(item_id)
                row.name = name
                row.price = price
                session.add(row)
                session.commit()
                session.refresh(row)
                return ItemRead.model_validate(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not update item {item_id}: {e}") from e

    def delete(self, item_id: int) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(CatalogItem, item_id)
                if not row:
                    raise NotFoundError(item_id)
                session.delete(row)
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not delete item {item_id}: {e}") from e


class SqlPurchaseRepository:
    """
    Purchases in "purchases" + "purchase_items".

    NOTE:
      - record() is a single transaction: header flush assigns the PK,
        lines are added, one commit. Any failure rolls back both.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def list_all(self) -> list[PurchaseRead]:
        try:
            with Session(self.engine) as session:
                headers = session.exec(
                    select(Purchase).order_by(Purchase.purchased_at, Purchase.id)
                ).all()
                lines_by_purchase: dict[int, list[PurchaseItem]] = defaultdict(list)
                for line in session.exec(select(PurchaseItem).order_by(PurchaseItem.id)).all():
                    lines_by_purchase[line.purchase_id].append(line)
                return [
                    self._to_read(header, lines_by_purchase[header.id])
                    for header in headers
                ]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not load purchases: {e}") from e

    def record(self, total: float, lines: list[PurchaseLineCreate]) -> PurchaseRead:
        try:
            with Session(self.engine) as session:
                header = Purchase(total=total)
                session.add(header)
                session.flush()  # Assign PK

                rows = [
                    PurchaseItem(
                        purchase_id=header.id,
                        item_id=line.item_id,
                        name=line.name,
                        price=line.price,
                        quantity=line.quantity,
                    )
                    for line in lines
                ]
                session.add_all(rows)
                session.commit()

                session.refresh(header)
                for row in rows:
                    session.refresh(row)
                return self._to_read(header, rows)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not record purchase: {e}") from e

    @staticmethod
    def _to_read(header: Purchase, lines: list[PurchaseItem]) -> PurchaseRead:
        return PurchaseRead(
            id=header.id,
            total=header.total,
            purchased_at=header.purchased_at,
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
