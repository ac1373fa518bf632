# tests/test_auth.py
from tests.factories import API


def test_protected_route_without_token_returns_401(client):
    r = client.get(f"{API}/products")
    assert r.status_code == 401
    assert "message" in r.json()


def test_invalid_token_returns_401(client):
    r = client.get(f"{API}/products", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401
    assert r.json()["message"] == "Token inválido"


def test_inactive_user_is_rejected(client, make_user, headers_for):
    user = make_user("ghost", "worker", is_active=False)
    r = client.get(f"{API}/products", headers=headers_for(user))
    assert r.status_code == 401


def test_manager_is_not_a_warehouse_worker(client, make_user, headers_for):
    manager = make_user("boss", "manager")
    r = client.get(f"{API}/orders", headers=headers_for(manager))
    assert r.status_code == 403


def test_register_login_and_profile(client):
    r = client.post(f"{API}/auth/register", json={
        "username": "operario",
        "email": "Operario@WMS.test",
        "password": "clave123",
    })
    assert r.status_code == 201, r.text
    assert r.json()["role"] == "worker"

    r = client.post(f"{API}/auth/login", json={"email": "operario@wms.test", "password": "clave123"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "operario"

    r = client.get(f"{API}/auth/profile", headers={"Authorization": f"Bearer {body['token']}"})
    assert r.status_code == 200
    assert r.json()["email"] == "operario@wms.test"
    assert r.json()["last_login"] is not None


def test_register_duplicate_email_fails(client):
    payload = {"username": "uno", "email": "dup@wms.test", "password": "clave123"}
    assert client.post(f"{API}/auth/register", json=payload).status_code == 201

    r = client.post(f"{API}/auth/register", json={**payload, "username": "dos"})
    assert r.status_code == 400


def test_login_with_wrong_password(client):
    client.post(f"{API}/auth/register", json={
        "username": "operario", "email": "op@wms.test", "password": "clave123",
    })
    r = client.post(f"{API}/auth/login", json={"email": "op@wms.test", "password": "otra-clave"})
    assert r.status_code == 401


def test_only_admin_creates_users_with_roles(client, worker_headers, admin_headers):
    payload = {
        "username": "jefe",
        "email": "jefe@wms.test",
        "password": "clave123",
        "role": "manager",
    }
    r = client.post(f"{API}/auth/admin/create-user", headers=worker_headers, json=payload)
    assert r.status_code == 403

    r = client.post(f"{API}/auth/admin/create-user", headers=admin_headers, json=payload)
    assert r.status_code == 201, r.text
    assert r.json()["role"] == "manager"


def test_health_is_public(client):
    r = client.get(f"{API}/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_request_id_is_echoed(client):
    r = client.get(f"{API}/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time-Ms" in r.headers

    r = client.get(f"{API}/health")
    assert len(r.headers["X-Request-ID"]) == 12
