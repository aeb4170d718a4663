import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from food_delivery import config
from food_delivery.gateway import proxy
from food_delivery.gateway.main import app as gateway_app


@pytest.fixture
def recorded_upstream():
    """Gateway wired to a stub that records requests and answers 200 with an echo."""
    calls = []

    def handle(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"success": True, "data": {"path": request.url.path}})

    gateway_app.dependency_overrides[proxy.get_transport] = lambda: httpx.MockTransport(handle)
    yield TestClient(gateway_app), calls
    gateway_app.dependency_overrides.clear()


@pytest.fixture
def unreachable_upstream():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway_app.dependency_overrides[proxy.get_transport] = lambda: httpx.MockTransport(refuse)
    yield TestClient(gateway_app)
    gateway_app.dependency_overrides.clear()


def test_health_lists_service_urls_without_calling_them(recorded_upstream):
    client, calls = recorded_upstream
    body = client.get("/health").json()
    assert body["success"] is True
    assert body["message"] == "API Gateway is running"
    assert body["timestamp"].endswith("Z")
    assert body["services"] == {
        "userService": config.USER_SERVICE_URL,
        "orderService": config.ORDER_SERVICE_URL,
    }
    assert calls == []


def test_api_prefix_is_rewritten_to_backend_path(recorded_upstream):
    client, calls = recorded_upstream
    client.get("/api/users/7")
    client.get("/api/orders/3/with-user")
    assert str(calls[0].url) == f"{config.USER_SERVICE_URL}/users/7"
    assert str(calls[1].url) == f"{config.ORDER_SERVICE_URL}/orders/3/with-user"


def test_query_and_body_forwarded_verbatim(recorded_upstream):
    client, calls = recorded_upstream
    client.get("/api/orders", params={"userId": 2})
    assert calls[0].url.params["userId"] == "2"

    raw = b'{"status":"processing"}'
    client.put("/api/orders/1", content=raw, headers={"Content-Type": "application/json", "X-Trace": "abc"})
    assert calls[1].method == "PUT"
    assert calls[1].content == raw
    assert calls[1].headers["content-type"] == "application/json"
    assert "x-trace" not in calls[1].headers


def test_user_filter_relayed_without_gateway_validation(recorded_upstream):
    client, calls = recorded_upstream
    resp = client.get("/api/orders?userId=abc")
    assert resp.status_code == 200
    assert calls[0].url.query == b"userId=abc"


def test_request_line_is_logged(recorded_upstream, caplog):
    client, _ = recorded_upstream
    caplog.set_level(logging.INFO, logger="food_delivery.gateway.main")
    client.get("/api/orders", params={"userId": 2})
    assert any(
        record.getMessage().startswith("[") and record.getMessage().endswith("] GET /api/orders?userId=2")
        for record in caplog.records
    )


def test_upstream_status_kept_on_single_resource_gets(gateway_api):
    resp = gateway_api.get("/api/users/999")
    assert resp.status_code == 404
    body = resp.json()
    assert body == {"success": False, "message": "Error fetching user", "error": "User tidak ditemukan"}

    assert gateway_api.get("/api/orders/999").status_code == 404
    assert gateway_api.get("/api/orders/999/with-user").status_code == 404


def test_upstream_errors_coerced_to_500_elsewhere(gateway_api):
    resp = gateway_api.delete("/api/users/999")
    assert resp.status_code == 500
    assert resp.json()["message"] == "Error deleting user"

    resp = gateway_api.post("/api/orders", json={"userId": 1})
    assert resp.status_code == 500
    assert resp.json()["message"] == "Error creating order"
    assert resp.json()["error"] == "Semua field wajib diisi"

    assert gateway_api.put("/api/orders/1", json={}).status_code == 500
    assert gateway_api.delete("/api/orders/999").status_code == 500


def test_propagate_all_status_switch(gateway_api, monkeypatch):
    monkeypatch.setattr(config, "GATEWAY_PROPAGATE_ALL_STATUS", True)
    assert gateway_api.delete("/api/users/999").status_code == 404
    assert gateway_api.post("/api/orders", json={"userId": 1}).status_code == 400


def test_unreachable_backend_is_500(unreachable_upstream):
    resp = unreachable_upstream.get("/api/users")
    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Error fetching users"
    assert body["error"]

    assert unreachable_upstream.get("/api/orders/1").status_code == 500


def test_delete_order_through_gateway(gateway_api):
    resp = gateway_api.delete("/api/orders/2")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Order berhasil dihapus"
    assert gateway_api.get("/api/orders/2").status_code == 404


def test_user_crud_through_gateway(gateway_api):
    created = gateway_api.post(
        "/api/users",
        json={"name": "Sari", "email": "sari@example.com", "phone": "0812", "address": "Jl. B"},
    )
    assert created.status_code == 201
    user_id = created.json()["data"]["id"]

    updated = gateway_api.put(f"/api/users/{user_id}", json={"address": "Jl. C"})
    assert updated.status_code == 200
    assert updated.json()["data"]["address"] == "Jl. C"

    deleted = gateway_api.delete(f"/api/users/{user_id}")
    assert deleted.json() == {"success": True, "message": "User berhasil dihapus"}


def test_orphaned_order_with_user_is_500(gateway_api):
    assert gateway_api.delete("/api/users/1").status_code == 200
    resp = gateway_api.get("/api/orders/1/with-user")
    assert resp.status_code == 500
    assert resp.json()["error"] == "Gagal mengambil data user"


def test_gateway_docs(recorded_upstream):
    client, _ = recorded_upstream
    schema = client.get("/api-docs/openapi.json").json()
    assert "/api/orders/{order_id}/with-user" in schema["paths"]
    assert "requestBody" in schema["paths"]["/api/users"]["post"]
    params = schema["paths"]["/api/orders"]["get"]["parameters"]
    assert [p["name"] for p in params] == ["userId"]
