from fastapi.testclient import TestClient

from refreshments.core.errors import PersistenceError
from refreshments.main import create_app
from refreshments.repositories.memory import MemoryCatalogRepository, MemoryPurchaseRepository

API = "/api/v1"


class FailingCatalogRepository(MemoryCatalogRepository):
    failing = False

    def create(self, name, price):
        if self.failing:
            raise PersistenceError("store down")
        return super().create(name, price)


def test_health(client):
    assert client.get("/").json() == {"status": "ok", "service": "refreshments-counter"}


def test_catalog_listing(client):
    items = client.get(f"{API}/items").json()
    assert len(items) == 8
    assert items[0] == {"id": 1, "name": "Coffee", "price": 25.0}

    summary = client.get(f"{API}/items/summary").json()
    assert summary == {"item_count": 8, "min_price": 10.0, "max_price": 80.0}


def test_purchase_flow(client):
    client.post(f"{API}/cart", json={"item_id": 1})
    client.post(f"{API}/cart", json={"item_id": 1})
    cart = client.post(f"{API}/cart", json={"item_id": 5}).json()
    assert cart["total_price"] == 65.0
    assert cart["total_quantity"] == 3

    shown = client.post(f"{API}/checkout").json()
    assert shown == {"status": "shown", "total": 65.0}

    res = client.post(f"{API}/checkout/confirm")
    assert res.status_code == 201
    purchase = res.json()
    assert purchase["total"] == 65.0

    assert client.get(f"{API}/cart").json()["items"] == []
    assert client.get(f"{API}/session").json()["checkout"] == {"status": "hidden"}
    assert len(client.get(f"{API}/purchases").json()) == 1

    day = purchase["purchased_at"][:10]
    report = client.get(f"{API}/reports/daily", params={"day": day}).json()
    assert report["purchase_count"] == 1
    assert report["total_revenue"] == 65.0


def test_cart_quantity_and_removal(client):
    client.post(f"{API}/cart", json={"item_id": 2})
    cart = client.patch(f"{API}/cart/2", json={"quantity": 4}).json()
    assert cart["items"][0]["quantity"] == 4

    cart = client.patch(f"{API}/cart/2", json={"quantity": 0}).json()
    assert cart["items"] == []

    client.post(f"{API}/cart", json={"item_id": 3})
    assert client.delete(f"{API}/cart/3").json()["items"] == []


def test_empty_checkout(client):
    res = client.post(f"{API}/checkout")
    assert res.status_code == 400
    assert res.json() == {"error": "empty_cart", "detail": "Cart is empty"}


def test_confirm_without_modal(client):
    client.post(f"{API}/cart", json={"item_id": 1})

    res = client.post(f"{API}/checkout/confirm")
    assert res.status_code == 409
    assert res.json()["error"] == "invalid_state"


def test_tab_switch(client):
    view = client.put(f"{API}/session/tab", json={"tab": "reports"}).json()
    assert view["tab"] == "reports"

    client.post(f"{API}/cart", json={"item_id": 1})
    client.post(f"{API}/checkout")
    assert client.put(f"{API}/session/tab", json={"tab": "manage"}).status_code == 409

    client.post(f"{API}/checkout/cancel")
    assert client.put(f"{API}/session/tab", json={"tab": "manage"}).status_code == 200


def test_item_crud(client):
    res = client.post(f"{API}/items", json={"name": "Juice", "price": "35"})
    assert res.status_code == 201
    juice = res.json()

    updated = client.patch(f"{API}/items/{juice['id']}", json={"price": 30}).json()
    assert updated == {"id": juice["id"], "name": "Juice", "price": 30.0}

    assert client.delete(f"{API}/items/{juice['id']}").status_code == 204
    assert client.delete(f"{API}/items/{juice['id']}").status_code == 404


def test_item_validation(client):
    res = client.post(f"{API}/items", json={"name": " ", "price": "10"})
    assert res.status_code == 422
    assert res.json()["error"] == "validation_error"

    res = client.post(f"{API}/items", json={"name": "Juice", "price": "abc"})
    assert res.status_code == 422

    assert len(client.get(f"{API}/items").json()) == 8


def test_unknown_item(client):
    res = client.patch(f"{API}/items/999", json={"name": "Ghost"})
    assert res.status_code == 404
    assert res.json() == {"error": "not_found", "detail": "Item not found: 999"}

    assert client.post(f"{API}/cart", json={"item_id": 999}).status_code == 404


def test_manage_form(client):
    assert client.post(f"{API}/manage/add").json() == {
        "mode": "adding",
        "draft": {"name": "", "price": ""},
    }
    client.patch(f"{API}/manage/draft", json={"name": "Juice", "price": "-1"})

    res = client.post(f"{API}/manage/submit")
    assert res.status_code == 422
    assert client.get(f"{API}/session").json()["manage"]["draft"]["name"] == "Juice"

    client.patch(f"{API}/manage/draft", json={"price": "35"})
    item = client.post(f"{API}/manage/submit").json()
    assert item["name"] == "Juice"
    assert client.get(f"{API}/session").json()["manage"] == {"mode": "browsing"}


def test_edit_form(client):
    editing = client.post(f"{API}/manage/edit/1").json()
    assert editing == {
        "mode": "editing",
        "item_id": 1,
        "draft": {"name": "Coffee", "price": "25"},
    }

    client.patch(f"{API}/manage/draft", json={"price": "27.5"})
    assert client.post(f"{API}/manage/submit").json()["price"] == 27.5

    client.post(f"{API}/manage/edit/2")
    view = client.post(f"{API}/manage/cancel").json()
    assert view["manage"] == {"mode": "browsing"}


def test_report_date_selection(client):
    report = client.put(f"{API}/reports/date", json={"day": "2024-01-01"}).json()
    assert report == {
        "day": "2024-01-01",
        "purchase_count": 0,
        "total_revenue": 0,
        "purchases": [],
    }
    assert client.get(f"{API}/session").json()["selected_date"] == "2024-01-01"
    assert client.get(f"{API}/reports/daily").json()["day"] == "2024-01-01"


def test_store_failure_is_reported(settings):
    catalog_repo = FailingCatalogRepository(seed=True)
    catalog_repo.failing = True
    app = create_app(
        settings,
        catalog_repo=catalog_repo,
        purchase_repo=MemoryPurchaseRepository(),
    )
    with TestClient(app) as client:
        res = client.post(f"{API}/items", json={"name": "Juice", "price": 35})

        assert res.status_code == 503
        assert res.json() == {"error": "persistence_error", "detail": "store down"}
        assert len(client.get(f"{API}/items").json()) == 8


def test_boolean_price_is_rejected(client):
    res = client.post(f"{API}/items", json={"name": "Juice", "price": True})
    assert res.status_code == 422

    res = client.patch(f"{API}/items/1", json={"price": False})
    assert res.status_code == 422

    items = client.get(f"{API}/items").json()
    assert len(items) == 8
    assert items[0]["price"] == 25.0


def test_integer_and_text_prices_still_accepted(client):
    assert client.post(f"{API}/items", json={"name": "Juice", "price": 35}).json()["price"] == 35.0
    assert client.post(f"{API}/items", json={"name": "Lassi", "price": "40.5"}).json()["price"] == 40.5
