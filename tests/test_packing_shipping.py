# tests/test_packing_shipping.py
from tests.factories import API, picked_order


def _packed_order(client, headers, suffix="1"):
    state = picked_order(client, headers, suffix=suffix)
    task = client.post(f"{API}/packing", headers=headers, json={"order_id": state["order_id"]}).json()
    client.post(f"{API}/packing/{task['id']}/start", headers=headers)
    r = client.post(f"{API}/packing/{task['id']}/complete", headers=headers, json={
        "weight": 1.5, "package_type": "box",
    })
    assert r.status_code == 200, r.text
    return {**state, "packing_task_id": task["id"]}


def _shipping_task(client, headers, state):
    r = client.post(f"{API}/shipping", headers=headers, json={
        "order_id": state["order_id"],
        "packing_task_id": state["packing_task_id"],
        "carrier": "Servientrega",
        "shipping_method": "express",
    })
    assert r.status_code == 201, r.text
    return r.json()


def _order_status(client, headers, order_id):
    return client.get(f"{API}/orders/{order_id}", headers=headers).json()["status"]


# ===== EMPAQUE =====

def test_packing_discovers_task_and_cart(client, worker_headers):
    state = picked_order(client, worker_headers)

    r = client.post(f"{API}/packing", headers=worker_headers, json={"order_id": state["order_id"]})
    assert r.status_code == 201, r.text
    task = r.json()
    assert task["status"] == "created"
    assert task["picking_task_id"] == state["picking_task_id"]
    assert task["picking_cart_id"] == state["picking_cart_id"]
    assert _order_status(client, worker_headers, state["order_id"]) == "packing"


def test_packing_requires_picked_order(client, worker_headers):
    state = picked_order(client, worker_headers)
    client.post(f"{API}/packing", headers=worker_headers, json={"order_id": state["order_id"]})

    r = client.post(f"{API}/packing", headers=worker_headers, json={"order_id": state["order_id"]})
    assert r.status_code == 400
    assert r.json()["current"] == "packing"


def test_packing_with_explicit_incomplete_cart_fails(client, worker_headers):
    state = picked_order(client, worker_headers)
    cart = client.post(f"{API}/picking-carts", headers=worker_headers, json={"barcode": "IDLE"}).json()

    r = client.post(f"{API}/packing", headers=worker_headers, json={
        "order_id": state["order_id"], "picking_cart_id": cart["id"],
    })
    assert r.status_code == 400
    assert _order_status(client, worker_headers, state["order_id"]) == "picked"


def test_complete_packing_releases_cart(client, worker_headers):
    state = picked_order(client, worker_headers)
    task = client.post(f"{API}/packing", headers=worker_headers, json={"order_id": state["order_id"]}).json()

    r = client.post(f"{API}/packing/{task['id']}/complete", headers=worker_headers, json={
        "weight": 2.0, "package_type": "box",
    })
    assert r.status_code == 400

    r = client.post(f"{API}/packing/{task['id']}/start", headers=worker_headers)
    assert r.json()["status"] == "in_progress"

    r = client.post(f"{API}/packing/{task['id']}/complete", headers=worker_headers, json={
        "weight": 2.0, "package_type": "envelope",
    })
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["status"] == "completed"
    assert body["package_weight"] == 2.0
    assert body["package_type"] == "envelope"

    order = client.get(f"{API}/orders/{state['order_id']}", headers=worker_headers).json()
    assert order["status"] == "packed"
    assert order["items"][0]["status"] == "packed"

    cart = client.get(f"{API}/picking-carts/{state['picking_cart_id']}", headers=worker_headers).json()
    assert cart["status"] == "free"
    assert cart["picking_task_id"] is None
    assert cart["items"] == []

    r = client.post(f"{API}/packing/{task['id']}/complete", headers=worker_headers, json={
        "weight": 2.0, "package_type": "envelope",
    })
    assert r.status_code == 400
    assert r.json()["current"] == "completed"


def test_complete_packing_validates_package(client, worker_headers):
    state = picked_order(client, worker_headers)
    task = client.post(f"{API}/packing", headers=worker_headers, json={"order_id": state["order_id"]}).json()
    client.post(f"{API}/packing/{task['id']}/start", headers=worker_headers)

    for payload in ({"weight": 0, "package_type": "box"}, {"weight": 1, "package_type": "crate"}):
        r = client.post(f"{API}/packing/{task['id']}/complete", headers=worker_headers, json=payload)
        assert r.status_code == 400


# ===== DESPACHO =====

def test_full_shipping(client, worker_headers):
    state = _packed_order(client, worker_headers)
    task = _shipping_task(client, worker_headers, state)
    assert task["status"] == "created"
    assert task["shipping_name"] == "Cliente Prueba"
    assert task["shipping_address"] == "Calle 1 # 2-3"
    assert _order_status(client, worker_headers, state["order_id"]) == "shipping"

    r = client.post(f"{API}/shipping/{task['id']}/complete", headers=worker_headers, json={"tracking_number": "TRK-1"})
    assert r.status_code == 400

    assert client.post(f"{API}/shipping/{task['id']}/start", headers=worker_headers).json()["status"] == "in_progress"

    r = client.post(f"{API}/shipping/{task['id']}/complete", headers=worker_headers, json={"tracking_number": "   "})
    assert r.status_code == 400

    r = client.post(f"{API}/shipping/{task['id']}/complete", headers=worker_headers, json={
        "tracking_number": "TRK-1", "shipping_cost": "12.50",
    })
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "completed"
    assert r.json()["tracking_number"] == "TRK-1"
    assert _order_status(client, worker_headers, state["order_id"]) == "shipped"

    r = client.post(f"{API}/shipping/{task['id']}/cancel", headers=worker_headers, json={"reason": "tarde"})
    assert r.status_code == 400


def test_cancel_shipping_returns_order_to_packed(client, worker_headers):
    state = _packed_order(client, worker_headers)
    task = _shipping_task(client, worker_headers, state)
    client.post(f"{API}/shipping/{task['id']}/start", headers=worker_headers)

    r = client.post(f"{API}/shipping/{task['id']}/cancel", headers=worker_headers, json={"reason": "Dirección errónea"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "cancelled"
    assert r.json()["cancellation_reason"] == "Dirección errónea"
    assert _order_status(client, worker_headers, state["order_id"]) == "packed"

    assert client.post(f"{API}/shipping/{task['id']}/cancel", headers=worker_headers).status_code == 400

    retry = _shipping_task(client, worker_headers, state)
    assert retry["id"] != task["id"]


def test_shipping_requires_packing_task_of_same_order(client, worker_headers):
    first = _packed_order(client, worker_headers, suffix="1")
    second = _packed_order(client, worker_headers, suffix="2")

    r = client.post(f"{API}/shipping", headers=worker_headers, json={
        "order_id": first["order_id"], "packing_task_id": second["packing_task_id"],
    })
    assert r.status_code == 400
    assert r.json()["packing_task_order_id"] == second["order_id"]
    assert _order_status(client, worker_headers, first["order_id"]) == "packed"


def test_shipping_requires_packed_order(client, worker_headers):
    state = picked_order(client, worker_headers)
    r = client.post(f"{API}/shipping", headers=worker_headers, json={
        "order_id": state["order_id"], "packing_task_id": 1,
    })
    assert r.status_code == 400
    assert r.json()["expected"] == ["packed"]


def test_list_tasks_by_status(client, worker_headers):
    state = _packed_order(client, worker_headers)
    _shipping_task(client, worker_headers, state)

    assert len(client.get(f"{API}/packing", headers=worker_headers, params={"status": "completed"}).json()) == 1
    assert len(client.get(f"{API}/shipping", headers=worker_headers, params={"status": "created"}).json()) == 1
    assert client.get(f"{API}/shipping", headers=worker_headers, params={"status": "completed"}).json() == []
