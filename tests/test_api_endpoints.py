"""Tests for the application factory, error envelope and auth guards."""

from uuid import uuid4

from fastapi.testclient import TestClient

from clubsite.api.app import create_app
from clubsite.config import Settings
from tests.conftest import ADMIN_TOKEN, MEMBER_TOKEN

ADMIN = {"Authorization": f"Bearer {ADMIN_TOKEN}"}
MEMBER = {"Authorization": f"Bearer {MEMBER_TOKEN}"}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_not_found_uses_envelope(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/events/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Event not found",
        "data": None,
    }


def test_request_validation_uses_envelope(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/albums/not-a-uuid")

    body = response.json()
    assert response.status_code == 422
    assert body["success"] is False
    assert body["message"] == "Invalid input"
    assert body["data"]


def test_admin_routes_reject_anonymous_and_members(container) -> None:
    client = TestClient(create_app(container))

    anonymous = client.post("/albums", json={"title": "Tour"})
    member = client.post("/albums", json={"title": "Tour"}, headers=MEMBER)
    invalid = client.post(
        "/albums", json={"title": "Tour"}, headers={"Authorization": "Bearer nope"}
    )
    admin = client.post("/albums", json={"title": "Tour"}, headers=ADMIN)

    assert anonymous.status_code == 401
    assert anonymous.json()["message"] == "You must be logged in"
    assert member.status_code == 403
    assert member.json()["message"] == "Admin access required"
    assert invalid.status_code == 401
    assert admin.status_code == 201
    assert admin.json()["success"] is True


def test_admin_router_requires_admin(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/storage/buckets").status_code == 401
    assert client.get("/admin/storage/buckets", headers=MEMBER).status_code == 403


def test_unexpected_error_returns_generic_message(container, monkeypatch) -> None:
    def explode() -> None:
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(container.joker_draw_service.repository, "get_current", explode)
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get("/joker-draw")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "An unexpected error occurred",
        "data": None,
    }


def test_unexpected_error_includes_detail_locally(container, monkeypatch) -> None:
    def explode() -> None:
        raise RuntimeError("boom")

    container.settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        environment="local",
    )
    monkeypatch.setattr(container.joker_draw_service.repository, "get_current", explode)
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get("/joker-draw")

    assert response.status_code == 500
    assert response.json()["message"] == (
        "An unexpected error occurred (debug: RuntimeError: boom)"
    )


def test_storage_failure_maps_to_bad_gateway(container) -> None:
    container.gallery_service.storage.fail_uploads = True
    client = TestClient(create_app(container))

    response = client.post(
        "/gallery/images",
        data={"title": "Broken"},
        files={"file": ("a.png", b"\x89PNG", "image/png")},
        headers=ADMIN,
    )

    assert response.status_code == 502
    assert response.json()["message"] == "Failed to upload file"
