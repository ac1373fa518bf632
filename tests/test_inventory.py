# tests/test_inventory.py
import pytest

from app.core.exceptions import CapacityError
from app.modules.inventory.service import InventoryService
from tests.factories import API, create_location, place, receive, stock


def _location(client, headers, location_id):
    return client.get(f"{API}/locations/{location_id}", headers=headers).json()


def test_placement_fills_location_until_capacity(client, worker_headers):
    location = create_location(client, worker_headers, capacity=100)

    body = stock(client, worker_headers, "SKU-1", 60, location["id"], invoice_number="INV-1")
    assert body["location"]["used_capacity"] == 60
    assert body["location"]["status"] == "reserved"
    assert body["inventory"]["status"] == "placed"
    assert body["item"]["placed_quantity"] == 60

    body = stock(client, worker_headers, "SKU-2", 40, location["id"], invoice_number="INV-2")
    assert body["location"]["used_capacity"] == 100
    assert body["location"]["status"] == "occupied"

    invoice = receive(client, worker_headers, "INV-3", "SKU-3", 1)
    r = place(client, worker_headers, invoice, location["id"], 1)
    assert r.status_code == 400
    assert r.json()["requested"] == 1
    assert r.json()["available"] == 0

    assert _location(client, worker_headers, location["id"])["used_capacity"] == 100
    rows = client.get(f"{API}/inventory", headers=worker_headers).json()
    assert len(rows) == 2


def test_cannot_place_more_than_counted(client, worker_headers):
    location = create_location(client, worker_headers)
    invoice = receive(client, worker_headers, "INV-1", "SKU-1", 10)

    assert place(client, worker_headers, invoice, location["id"], 6).status_code == 200
    r = place(client, worker_headers, invoice, location["id"], 5)
    assert r.status_code == 400
    assert r.json()["available"] == 4


def test_zero_quantity_placement_is_rejected(client, worker_headers):
    location = create_location(client, worker_headers)
    invoice = receive(client, worker_headers, "INV-1", "SKU-1", 10)
    assert place(client, worker_headers, invoice, location["id"], 0).status_code == 400


def test_cannot_place_uncounted_item(client, worker_headers):
    location = create_location(client, worker_headers)
    r = client.post(f"{API}/receiving", headers=worker_headers, json={
        "invoice_number": "INV-1",
        "items": [{"product_id": "P1", "sku": "SKU-1", "name": "Uno", "expected_quantity": 3}],
    })
    invoice = r.json()
    r = place(client, worker_headers, invoice, location["id"], 1)
    assert r.status_code == 400
    assert r.json()["entity"] == "invoice_item"


def test_placement_cart_is_released_when_item_fully_placed(client, worker_headers):
    location = create_location(client, worker_headers)
    cart = client.post(f"{API}/placement-carts", headers=worker_headers).json()
    invoice = receive(client, worker_headers, "INV-1", "SKU-1", 10, placement_cart_id=cart["id"])

    place(client, worker_headers, invoice, location["id"], 4)
    current = client.get(f"{API}/placement-carts/{cart['id']}", headers=worker_headers).json()
    assert current["status"] == "occupied"
    assert current["items"][0]["placed_quantity"] == 4

    body = place(client, worker_headers, invoice, location["id"], 6).json()
    assert body["item"]["placement_cart_id"] is None

    current = client.get(f"{API}/placement-carts/{cart['id']}", headers=worker_headers).json()
    assert current["status"] == "free"
    assert current["items"] == []


def test_stock_and_product_detail(client, worker_headers):
    a = create_location(client, worker_headers, barcode="LOC-A")
    b = create_location(client, worker_headers, barcode="LOC-B")
    stock(client, worker_headers, "SKU-1", 7, a["id"], invoice_number="INV-1")
    stock(client, worker_headers, "SKU-1", 3, b["id"], invoice_number="INV-2")

    r = client.get(f"{API}/inventory/stock/SKU-1", headers=worker_headers)
    assert r.json() == {"sku": "SKU-1", "quantity": 10}

    product = client.get(f"{API}/products/barcode/BC-SKU-1", headers=worker_headers).json()
    detail = client.get(f"{API}/products/{product['id']}", headers=worker_headers).json()
    assert detail["stock_quantity"] == 10
    assert sorted(loc["location_info"]["barcode"] for loc in detail["locations"]) == ["LOC-A", "LOC-B"]

    r = client.get(f"{API}/inventory", headers=worker_headers, params={"location_id": b["id"]})
    assert [row["quantity"] for row in r.json()] == [3]


def test_in_stock_filter_hides_products_without_stock(client, worker_headers):
    location = create_location(client, worker_headers)
    stock(client, worker_headers, "SKU-1", 5, location["id"])
    client.post(f"{API}/products", headers=worker_headers, json={
        "sku": "SKU-EMPTY", "product_id": "P-E", "name": "Sin stock",
    })

    all_skus = {p["sku"] for p in client.get(f"{API}/products", headers=worker_headers).json()}
    assert all_skus == {"SKU-1", "SKU-EMPTY"}

    r = client.get(f"{API}/products", headers=worker_headers, params={"inStock": "true"})
    assert [p["sku"] for p in r.json()] == ["SKU-1"]
    assert r.json()[0]["stock_quantity"] == 5


def test_adjust_inventory_down(client, worker_headers):
    location = create_location(client, worker_headers, capacity=20)
    stock(client, worker_headers, "SKU-1", 10, location["id"])

    r = client.post(f"{API}/inventory/adjust", headers=worker_headers, json={
        "sku": "SKU-1", "location_id": location["id"], "actual_quantity": 7,
    })
    assert r.status_code == 200, r.text
    assert r.json() == {
        "sku": "SKU-1",
        "location_id": location["id"],
        "previous_quantity": 10,
        "actual_quantity": 7,
        "delta": -3,
        "location_used_capacity": 7,
        "location_status": "reserved",
    }


def test_adjust_consolidates_rows(client, worker_headers):
    location = create_location(client, worker_headers)
    stock(client, worker_headers, "SKU-1", 5, location["id"], invoice_number="INV-1")
    stock(client, worker_headers, "SKU-1", 5, location["id"], invoice_number="INV-2")

    r = client.post(f"{API}/inventory/adjust", headers=worker_headers, json={
        "sku": "SKU-1", "location_id": location["id"], "actual_quantity": 12,
    })
    assert r.json()["delta"] == 2

    rows = client.get(f"{API}/inventory", headers=worker_headers, params={"sku": "SKU-1"}).json()
    assert [row["quantity"] for row in rows] == [12]
    assert _location(client, worker_headers, location["id"])["used_capacity"] == 12


def test_adjust_beyond_capacity_fails(client, worker_headers):
    location = create_location(client, worker_headers, capacity=10)
    stock(client, worker_headers, "SKU-1", 8, location["id"])

    r = client.post(f"{API}/inventory/adjust", headers=worker_headers, json={
        "sku": "SKU-1", "location_id": location["id"], "actual_quantity": 11,
    })
    assert r.status_code == 400
    assert _location(client, worker_headers, location["id"])["used_capacity"] == 8


def test_adjust_creates_row_for_new_pair(client, worker_headers):
    location = create_location(client, worker_headers)
    client.post(f"{API}/products", headers=worker_headers, json={
        "sku": "SKU-9", "product_id": "P-9", "name": "Nueve",
    })

    r = client.post(f"{API}/inventory/adjust", headers=worker_headers, json={
        "sku": "SKU-9", "location_id": location["id"], "actual_quantity": 4,
    })
    assert r.json()["previous_quantity"] == 0
    assert r.json()["location_status"] == "reserved"
    assert client.get(f"{API}/inventory/stock/SKU-9", headers=worker_headers).json()["quantity"] == 4


def test_adjust_unknown_sku_is_404(client, worker_headers):
    location = create_location(client, worker_headers)
    r = client.post(f"{API}/inventory/adjust", headers=worker_headers, json={
        "sku": "NOPE", "location_id": location["id"], "actual_quantity": 1,
    })
    assert r.status_code == 404


def test_quantity_guards_raise_capacity_error(client, worker_headers, db):
    location = create_location(client, worker_headers, capacity=5)
    invoice = receive(client, worker_headers, "INV-1", "SKU-1", 10)
    item_id = invoice["items"][0]["id"]
    service = InventoryService(db)

    with pytest.raises(CapacityError) as exc:
        service.place_item(invoice["id"], item_id, location["id"], 11)
    assert exc.value.details == {"requested": 11, "available": 10}

    with pytest.raises(CapacityError) as exc:
        service.place_item(invoice["id"], item_id, location["id"], 6)
    assert exc.value.details == {"requested": 6, "available": 5}

    with pytest.raises(CapacityError):
        service.adjust_inventory("SKU-1", location["id"], 6)
