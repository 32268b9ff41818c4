"""HTTP tests for the storefront API against an in-memory SQLite database."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import patch
from app.exceptions import PersistenceError
from app.models.contact import Contact
from app.models.order import Order, OrderLine


def order_body(vehicle_ids, **overrides):
    body = {
        "customer_name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "order_type": "rent",
        "start_date": "2024-01-01",
        "end_date": "2024-01-04",
        "items": [{"vehicle_id": vehicle_ids["BMW"], "quantity": 1}],
    }
    body.update(overrides)
    return body


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["database"] == "ok"


def test_vehicles_listed_by_id(client):
    r = client.get("/api/vehicles")
    assert r.status_code == 200
    rows = r.json()
    assert [row["id"] for row in rows] == sorted(row["id"] for row in rows)
    assert rows[0] == {
        "id": rows[0]["id"],
        "name": "BMW",
        "type": "car",
        "fuel": "gasoline",
        "price_per_day_rent": 39.99,
        "price_buy": 16999.0,
        "image_url": "/photos/bmw.jpg",
    }


def test_rent_order(client, db, vehicle_ids):
    r = client.post("/api/order", json=order_body(vehicle_ids))
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["ok"] is True
    assert data["days"] == 3
    assert data["total"] == 119.97

    order = db.get(Order, data["orderId"])
    assert order.customer_name == "Jane Doe"
    assert len(order.lines) == 1
    assert float(order.lines[0].price_each) == 39.99


def test_buy_order_uses_catalog_price(client, vehicle_ids):
    body = order_body(vehicle_ids, order_type="buy",
                      items=[{"vehicle_id": vehicle_ids["BMW"], "quantity": 2, "price_each": 1}])
    r = client.post("/api/order", json=body)
    assert r.status_code == 200
    assert r.json()["total"] == 33998.0
    assert r.json()["days"] == 1


def test_unknown_vehicle_line_is_dropped(client, db, vehicle_ids):
    body = order_body(vehicle_ids, order_type="buy",
                      items=[{"vehicle_id": vehicle_ids["Bugatti"], "quantity": 1},
                             {"vehicle_id": 999, "quantity": 3}])
    r = client.post("/api/order", json=body)
    assert r.status_code == 200
    assert r.json()["total"] == 28999.0
    assert db.query(OrderLine).count() == 1


def test_out_of_range_vehicle_id_is_unresolved(client, db, vehicle_ids):
    body = order_body(vehicle_ids, items=[{"vehicle_id": vehicle_ids["BMW"], "quantity": 1},
                                          {"vehicle_id": 10**20, "quantity": 1}])
    r = client.post("/api/order", json=body)
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 119.97
    assert db.query(OrderLine).count() == 1


def test_oversized_quantity_line_is_dropped(client, db, vehicle_ids):
    body = order_body(vehicle_ids, items=[{"vehicle_id": vehicle_ids["BMW"], "quantity": 1},
                                          {"vehicle_id": vehicle_ids["Bugatti"], "quantity": 10**20}])
    r = client.post("/api/order", json=body)
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 119.97
    assert db.query(OrderLine).count() == 1


def test_non_integer_vehicle_id_prices_to_zero(client, db, vehicle_ids):
    for vehicle_id in ("abc", None):
        body = order_body(vehicle_ids, items=[{"vehicle_id": vehicle_id, "quantity": 1}])
        r = client.post("/api/order", json=body)
        assert r.status_code == 200, r.text
        assert r.json()["total"] == 0
    assert db.query(Order).count() == 2
    assert db.query(OrderLine).count() == 0


def test_missing_fields_rejected(client, db, vehicle_ids):
    for body in (
        order_body(vehicle_ids, customer_name=""),
        order_body(vehicle_ids, email=None),
        order_body(vehicle_ids, order_type="lease"),
        order_body(vehicle_ids, items=[]),
        order_body(vehicle_ids, items=[{"vehicle_id": vehicle_ids["BMW"], "quantity": 0}]),
        order_body(vehicle_ids, items="BMW"),
    ):
        r = client.post("/api/order", json=body)
        assert r.status_code == 400, body
        assert "error" in r.json()
    assert db.query(Order).count() == 0


def test_persistence_failure_is_500(client, db, vehicle_ids):
    with patch("app.routers.orders.create_order",
               side_effect=PersistenceError("Failed to create order.")):
        r = client.post("/api/order", json=order_body(vehicle_ids))
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create order."}
    assert client.get("/api/last-order").json() == {"lastOrder": None}


def test_last_order_follows_session(client, vehicle_ids):
    assert client.get("/api/last-order").json() == {"lastOrder": None}

    r = client.post("/api/order", json=order_body(vehicle_ids))
    order_id = r.json()["orderId"]

    last = client.get("/api/last-order").json()["lastOrder"]
    assert last["orderId"] == order_id
    assert last["total"] == 119.97
    assert isinstance(last["when"], int)


def test_quote_does_not_persist(client, db, vehicle_ids):
    body = order_body(vehicle_ids, items=[{"vehicle_id": vehicle_ids["BMW"], "quantity": 2},
                                          {"vehicle_id": vehicle_ids["Lamborghini"], "quantity": 1}])
    r = client.post("/api/quote", json=body)
    assert r.status_code == 200
    data = r.json()
    assert data["days"] == 3
    assert data["total"] == 479.91
    assert [line["amount"] for line in data["lines"]] == [239.94, 239.97]
    assert db.query(Order).count() == 0


def test_contact(client, db):
    r = client.post("/api/contact", json={"name": "Sam", "email": "sam@example.com", "message": "Hi"})
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert db.query(Contact).count() == 1


def test_contact_missing_fields(client, db):
    r = client.post("/api/contact", json={"name": "Sam", "email": "sam@example.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing fields"}
    assert db.query(Contact).count() == 0
