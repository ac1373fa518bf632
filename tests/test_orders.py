# tests/test_orders.py
import pytest

from app.core.exceptions import CapacityError
from app.modules.orders.service import OrderService
from tests.factories import API, create_location, create_order, stock


def test_create_order_copies_catalog_data(client, worker_headers):
    location = create_location(client, worker_headers)
    stock(client, worker_headers, "SKU-1", 5, location["id"])

    order = create_order(client, worker_headers, "ORD-1", [{"sku": "SKU-1", "quantity": 2}])
    assert order["status"] == "new"
    assert order["customer"]["name"] == "Cliente Prueba"
    item = order["items"][0]
    assert item["name"] == "Producto SKU-1"
    assert item["status"] == "pending"
    assert item["picked_quantity"] == 0


def test_create_order_with_unknown_sku_fails(client, worker_headers):
    r = client.post(f"{API}/orders", headers=worker_headers, json={
        "order_number": "ORD-1",
        "items": [{"sku": "GHOST", "quantity": 1}],
    })
    assert r.status_code == 400
    assert r.json()["sku"] == "GHOST"
    assert client.get(f"{API}/orders", headers=worker_headers).json() == []


def test_duplicate_order_number_fails(client, worker_headers):
    client.post(f"{API}/products", headers=worker_headers, json={"sku": "SKU-1", "product_id": "P", "name": "x"})
    create_order(client, worker_headers, "ORD-1", [{"sku": "SKU-1", "quantity": 1}])

    r = client.post(f"{API}/orders", headers=worker_headers, json={
        "order_number": "ORD-1",
        "items": [{"sku": "SKU-1", "quantity": 1}],
    })
    assert r.status_code == 400


def test_reserve_is_all_or_nothing(client, worker_headers):
    location = create_location(client, worker_headers)
    stock(client, worker_headers, "SKU-1", 10, location["id"], invoice_number="INV-1")
    stock(client, worker_headers, "SKU-2", 1, location["id"], invoice_number="INV-2")
    order = create_order(client, worker_headers, "ORD-1", [
        {"sku": "SKU-1", "quantity": 4},
        {"sku": "SKU-2", "quantity": 3},
    ])

    r = client.post(f"{API}/orders/{order['id']}/reserve", headers=worker_headers)
    assert r.status_code == 400
    assert r.json()["items"] == [{"sku": "SKU-2", "required": 3, "available": 1}]

    current = client.get(f"{API}/orders/{order['id']}", headers=worker_headers).json()
    assert current["status"] == "new"
    assert [i["status"] for i in current["items"]] == ["pending", "pending"]


def test_reserve_moves_order_to_processing(client, worker_headers):
    location = create_location(client, worker_headers)
    stock(client, worker_headers, "SKU-1", 10, location["id"])
    order = create_order(client, worker_headers, "ORD-1", [{"sku": "SKU-1", "quantity": 4}])

    r = client.post(f"{API}/orders/{order['id']}/reserve", headers=worker_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["order"]["status"] == "processing"
    assert body["order"]["items"][0]["status"] == "reserved"
    assert body["items"] == [{"sku": "SKU-1", "required": 4, "available": 10, "status": "reserved"}]

    r = client.post(f"{API}/orders/{order['id']}/reserve", headers=worker_headers)
    assert r.status_code == 400


def test_status_override(client, worker_headers):
    client.post(f"{API}/products", headers=worker_headers, json={"sku": "SKU-1", "product_id": "P", "name": "x"})
    order = create_order(client, worker_headers, "ORD-1", [{"sku": "SKU-1", "quantity": 1}])

    r = client.patch(f"{API}/orders/{order['id']}/status", headers=worker_headers, json={"status": "lost"})
    assert r.status_code == 400
    assert "cancelled" in r.json()["allowed"]

    r = client.patch(f"{API}/orders/{order['id']}/status", headers=worker_headers, json={"status": "cancelled"})
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"


def test_orders_listed_newest_first(client, worker_headers):
    client.post(f"{API}/products", headers=worker_headers, json={"sku": "SKU-1", "product_id": "P", "name": "x"})
    for number in ("ORD-1", "ORD-2", "ORD-3"):
        create_order(client, worker_headers, number, [{"sku": "SKU-1", "quantity": 1}])
    client.patch(f"{API}/orders/1/status", headers=worker_headers, json={"status": "cancelled"})

    numbers = [o["order_number"] for o in client.get(f"{API}/orders", headers=worker_headers).json()]
    assert numbers == ["ORD-3", "ORD-2", "ORD-1"]

    r = client.get(f"{API}/orders", headers=worker_headers, params={"status": "cancelled"})
    assert [o["order_number"] for o in r.json()] == ["ORD-1"]


def test_unknown_order_is_404(client, worker_headers):
    r = client.get(f"{API}/orders/999", headers=worker_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Pedido no encontrado"


def test_insufficient_stock_raises_capacity_error(client, worker_headers, db):
    location = create_location(client, worker_headers)
    stock(client, worker_headers, "SKU-1", 2, location["id"], invoice_number="INV-1")
    order = create_order(client, worker_headers, "ORD-1", [{"sku": "SKU-1", "quantity": 3}])

    with pytest.raises(CapacityError) as exc:
        OrderService(db).reserve_items(order["id"])
    assert exc.value.details["items"] == [{"sku": "SKU-1", "required": 3, "available": 2}]
