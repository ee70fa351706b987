from unittest.mock import MagicMock

import pytest
from sqlmodel import Session, select

from refreshments.core.errors import EmptyCartError, PersistenceError
from refreshments.models.purchase import Purchase, PurchaseItem
from refreshments.repositories.sql import SqlCatalogRepository, SqlPurchaseRepository
from refreshments.schemas.catalog import ItemRead
from refreshments.services.cart_service import Cart
from refreshments.services.catalog_service import CatalogService
from refreshments.services.purchase_service import PurchaseRecorder


@pytest.fixture
def catalog(repos):
    return CatalogService(repos[0])


@pytest.fixture
def recorder(repos):
    return PurchaseRecorder(repos[1])


def _cart(catalog, *item_ids):
    cart = Cart()
    for item_id in item_ids:
        cart.add(catalog.get_item(item_id))
    return cart


def test_empty_cart_makes_no_store_call():
    repo = MagicMock()
    recorder = PurchaseRecorder(repo)

    with pytest.raises(EmptyCartError):
        recorder.confirm(Cart())
    repo.record.assert_not_called()


def test_confirm_records_one_purchase_and_clears(catalog, recorder):
    cart = _cart(catalog, 1, 1, 5)
    expected_total = cart.total()

    purchase = recorder.confirm(cart)

    assert purchase.total == expected_total == 65.0
    assert cart.is_empty()
    assert recorder.list_purchases() == [purchase]
    assert {(line.item_id, line.quantity) for line in purchase.items} == {(1, 2), (5, 1)}


def test_total_matches_line_items(catalog, recorder):
    purchase = recorder.confirm(_cart(catalog, 3, 4, 4, 8))

    assert purchase.total == sum(line.price * line.quantity for line in purchase.items)


def test_price_edit_does_not_rewrite_history(catalog, recorder):
    purchase = recorder.confirm(_cart(catalog, 1, 1))

    catalog.update_item(1, "Coffee", "99")

    stored = recorder.list_purchases()[0]
    assert stored.total == purchase.total == 50.0
    assert stored.items[0].price == 25.0


def test_delete_does_not_rewrite_history(catalog, recorder):
    recorder.confirm(_cart(catalog, 2, 6))

    catalog.delete_item(2)

    stored = recorder.list_purchases()[0]
    assert stored.total == 30.0
    assert [(line.item_id, line.name, line.price) for line in stored.items] == [
        (2, "Tea", 20.0),
        (6, "Biscuits", 10.0),
    ]


def test_store_failure_keeps_cart():
    repo = MagicMock()
    repo.record.side_effect = PersistenceError("store down")
    recorder = PurchaseRecorder(repo)
    cart = Cart()
    cart.add(ItemRead(id=1, name="Coffee", price=25.0))

    with pytest.raises(PersistenceError):
        recorder.confirm(cart)
    assert cart.quantity_of(1) == 1


def test_sql_record_is_all_or_nothing(sql_engine):
    catalog = CatalogService(SqlCatalogRepository(sql_engine))
    catalog.create_item("Coffee", "25")
    recorder = PurchaseRecorder(SqlPurchaseRepository(sql_engine))
    cart = Cart()
    cart.add(catalog.list_items()[0])

    # Lines cannot be written once their table is gone
    PurchaseItem.__table__.drop(sql_engine)

    with pytest.raises(PersistenceError):
        recorder.confirm(cart)

    with Session(sql_engine) as session:
        assert session.exec(select(Purchase)).all() == []
    assert not cart.is_empty()
