# tests/test_receiving.py
from tests.factories import API, create_invoice, receive


def _scan_item(client, headers, invoice, barcode):
    item_id = invoice["items"][0]["id"]
    return client.post(
        f"{API}/receiving/{invoice['id']}/items/{item_id}/scan",
        headers=headers, json={"barcode": barcode},
    )


def _count_item(client, headers, invoice, quantity, placement_cart_id=None):
    item_id = invoice["items"][0]["id"]
    return client.post(
        f"{API}/receiving/{invoice['id']}/items/{item_id}/count",
        headers=headers,
        json={"actual_quantity": quantity, "placement_cart_id": placement_cart_id},
    )


def test_create_invoice_registers_unknown_skus(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-1", "SKU-NEW", 10, barcode="7701")
    assert invoice["status"] == "new"
    assert invoice["items"][0]["status"] == "pending"

    r = client.get(f"{API}/products/barcode/7701", headers=worker_headers)
    assert r.status_code == 200
    assert r.json()["sku"] == "SKU-NEW"


def test_duplicate_invoice_number_is_rejected(client, worker_headers):
    create_invoice(client, worker_headers, "INV-1", "SKU-1", 10)
    r = client.post(f"{API}/receiving", headers=worker_headers, json={
        "invoice_number": "INV-1",
        "items": [{"product_id": "P", "sku": "SKU-2", "name": "x", "expected_quantity": 1}],
    })
    assert r.status_code == 400
    assert r.json()["invoice_number"] == "INV-1"


def test_invoice_without_items_is_rejected(client, worker_headers):
    r = client.post(f"{API}/receiving", headers=worker_headers, json={"invoice_number": "INV-X", "items": []})
    assert r.status_code == 400


def test_full_receiving_without_discrepancies(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-1", "SKU-1", 10, barcode="BC-1")

    r = client.post(f"{API}/receiving/{invoice['id']}/scan", headers=worker_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "in_progress"

    assert _scan_item(client, worker_headers, invoice, "BC-1").json()["status"] == "scanned"
    r = _count_item(client, worker_headers, invoice, 10)
    assert r.status_code == 200
    assert r.json()["actual_quantity"] == 10
    assert r.json()["status"] == "counted"

    r = client.post(f"{API}/receiving/{invoice['id']}/complete", headers=worker_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["invoice"]["status"] == "accepted"
    assert body["invoice"]["completed_at"] is not None
    assert body["discrepancies"] == []


def test_discrepancies_are_reported(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-2", "SKU-1", 10, barcode="BC-1")
    _scan_item(client, worker_headers, invoice, "BC-1")
    _count_item(client, worker_headers, invoice, 7)

    r = client.post(f"{API}/receiving/{invoice['id']}/complete", headers=worker_headers)
    body = r.json()
    assert body["invoice"]["status"] == "accepted_with_discrepancies"
    assert body["discrepancies"][0]["difference"] == -3


def test_scanning_item_moves_new_invoice_to_in_progress(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-1", "SKU-1", 5)
    assert _scan_item(client, worker_headers, invoice, "anything").status_code == 200

    r = client.get(f"{API}/receiving/{invoice['id']}", headers=worker_headers)
    assert r.json()["status"] == "in_progress"


def test_barcode_mismatch_changes_nothing(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-1", "SKU-1", 5, barcode="BC-1")

    r = _scan_item(client, worker_headers, invoice, "BC-WRONG")
    assert r.status_code == 400
    assert r.json()["expected"] == "BC-1"
    assert r.json()["received"] == "BC-WRONG"

    current = client.get(f"{API}/receiving/{invoice['id']}", headers=worker_headers).json()
    assert current["status"] == "new"
    assert current["items"][0]["status"] == "pending"


def test_count_requires_scanned_item(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-1", "SKU-1", 5)
    client.post(f"{API}/receiving/{invoice['id']}/scan", headers=worker_headers)

    r = _count_item(client, worker_headers, invoice, 5)
    assert r.status_code == 400
    assert r.json()["current"] == "pending"


def test_complete_lists_uncounted_items(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-1", "SKU-1", 5)
    client.post(f"{API}/receiving/{invoice['id']}/scan", headers=worker_headers)

    r = client.post(f"{API}/receiving/{invoice['id']}/complete", headers=worker_headers)
    assert r.status_code == 400
    assert r.json()["uncounted_items"][0]["sku"] == "SKU-1"


def test_complete_twice_fails(client, worker_headers):
    invoice = receive(client, worker_headers, "INV-1", "SKU-1", 5)
    assert client.post(f"{API}/receiving/{invoice['id']}/complete", headers=worker_headers).status_code == 200
    assert client.post(f"{API}/receiving/{invoice['id']}/complete", headers=worker_headers).status_code == 400


def test_counting_into_placement_cart_occupies_it(client, worker_headers):
    cart = client.post(f"{API}/placement-carts", headers=worker_headers).json()
    assert cart["status"] == "free"

    invoice = receive(client, worker_headers, "INV-1", "SKU-1", 10, placement_cart_id=cart["id"])
    assert invoice["items"][0]["placement_cart_id"] == cart["id"]

    cart = client.get(f"{API}/placement-carts/{cart['id']}", headers=worker_headers).json()
    assert cart["status"] == "occupied"
    assert cart["items"][0]["quantity"] == 10
    assert cart["items"][0]["sku"] == "SKU-1"

    r = client.get(f"{API}/placement-carts", headers=worker_headers, params={"status": "occupied"})
    assert [c["id"] for c in r.json()] == [cart["id"]]


def test_counting_into_missing_cart_is_404(client, worker_headers):
    invoice = create_invoice(client, worker_headers, "INV-1", "SKU-1", 5)
    _scan_item(client, worker_headers, invoice, "x")
    r = _count_item(client, worker_headers, invoice, 5, placement_cart_id=999)
    assert r.status_code == 404

    current = client.get(f"{API}/receiving/{invoice['id']}", headers=worker_headers).json()
    assert current["items"][0]["status"] == "scanned"


def test_list_invoices_filtered_by_status(client, worker_headers):
    create_invoice(client, worker_headers, "INV-1", "SKU-1", 5)
    receive(client, worker_headers, "INV-2", "SKU-2", 5)

    r = client.get(f"{API}/receiving", headers=worker_headers, params={"status": "in_progress"})
    assert [i["invoice_number"] for i in r.json()] == ["INV-2"]
