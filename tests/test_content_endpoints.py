"""Tests for event, competition, document, result and joker draw endpoints."""

from fastapi.testclient import TestClient

from clubsite.api.app import create_app
from tests.conftest import ADMIN_TOKEN, MEMBER_TOKEN, PNG_BYTES

ADMIN = {"Authorization": f"Bearer {ADMIN_TOKEN}"}
MEMBER = {"Authorization": f"Bearer {MEMBER_TOKEN}"}

EVENT_FORM = {
    "title": "Quiz night",
    "date": "2025-11-14",
    "time": "20:00",
    "location": "Function room",
    "category": "social",
}


def test_event_crud(container, storage) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/events",
        data=EVENT_FORM,
        files={"image": ("flyer.png", PNG_BYTES, "image/png")},
        headers=ADMIN,
    )
    event = created.json()["data"]

    assert created.status_code == 201
    assert event["imageUrl"].endswith(event["imagePath"])
    assert event["description"] == ""

    listed = client.get("/events", params={"category": "social"}).json()["data"]
    assert [item["id"] for item in listed] == [event["id"]]
    assert client.get("/events", params={"category": "league"}).json()["data"] == []

    updated = client.patch(
        f"/events/{event['id']}", data={"location": "Main bar"}, headers=ADMIN
    ).json()["data"]
    assert updated["location"] == "Main bar"
    assert updated["imagePath"] == event["imagePath"]

    deleted = client.delete(f"/events/{event['id']}", headers=ADMIN)
    assert deleted.status_code == 200
    assert storage.paths("images") == []


def test_event_requires_fields(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/events", data={"title": "Incomplete"}, headers=ADMIN)

    assert response.status_code == 422
    assert response.json()["message"] == "Date is required"


def test_event_writes_require_admin(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/events", data=EVENT_FORM, headers=MEMBER)

    assert response.status_code == 403


def test_competitions_by_status(container) -> None:
    client = TestClient(create_app(container))
    form = {
        "title": "Singles",
        "date": "2025-07-01",
        "format": "Knockout",
        "entryDeadline": "2025-06-01",
        "status": "Upcoming",
    }
    later = client.post("/competitions", data=form, headers=ADMIN).json()["data"]
    sooner = client.post(
        "/competitions", data={**form, "date": "2025-06-15"}, headers=ADMIN
    ).json()["data"]
    invalid = client.post(
        "/competitions", data={**form, "status": "Postponed"}, headers=ADMIN
    )

    upcoming = client.get("/competitions", params={"status": "Upcoming"})

    assert later["entryDeadline"] == "2025-06-01"
    assert [item["id"] for item in upcoming.json()["data"]] == [
        sooner["id"],
        later["id"],
    ]
    assert invalid.status_code == 422


def test_document_upload_derives_details(container, storage) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/documents",
        data={"title": "Club rules", "category": "rules"},
        files={"file": ("rules.pdf", b"%PDF-1.7" + b"0" * 100, "application/pdf")},
        headers=ADMIN,
    )
    document = response.json()["data"]

    assert response.status_code == 201
    assert document["filetype"] == "PDF"
    assert document["filesize"] == "108 B"
    assert document["fileUrl"].endswith(document["filePath"])
    assert storage.paths("documents") == [document["filePath"]]


def test_result_items_replace_semantics(container) -> None:
    client = TestClient(create_app(container))
    created = client.post(
        "/results",
        json={
            "title": "Club championship",
            "date": "2025-09-01",
            "category": "singles",
            "items": [
                {"position": "1st", "name": "Jo Bloggs"},
                {"position": "2nd", "name": "Sam Smith"},
            ],
        },
        headers=ADMIN,
    ).json()["data"]
    result_id = created["id"]

    renamed = client.patch(
        f"/results/{result_id}", json={"title": "Championship"}, headers=ADMIN
    ).json()["data"]
    cleared = client.patch(
        f"/results/{result_id}", json={"items": []}, headers=ADMIN
    ).json()["data"]

    assert [item["name"] for item in created["items"]] == ["Jo Bloggs", "Sam Smith"]
    assert created["items"][0]["resultId"] == result_id
    assert renamed["title"] == "Championship"
    assert len(renamed["items"]) == 2
    assert cleared["items"] == []
    assert cleared["title"] == "Championship"


def test_result_requires_title(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/results", json={"date": "2025-09-01", "category": "pairs"}, headers=ADMIN
    )

    assert response.status_code == 422


def test_joker_draw_flow(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/joker-draw").json() == {
        "success": True,
        "message": None,
        "data": None,
    }

    image = client.post(
        "/joker-draw/winner-image",
        files={"file": ("winner.png", PNG_BYTES, "image/png")},
        headers=ADMIN,
    ).json()["data"]
    client.put(
        "/joker-draw",
        json={"lastWinner": "Alice", "lastWinAmount": 120, "currentJackpot": 450},
        headers=ADMIN,
    )
    updated = client.put(
        "/joker-draw",
        json={
            "lastWinner": "Bob",
            "lastWinAmount": 80,
            "currentJackpot": 600,
            "winnerImagePath": image["path"],
        },
        headers=ADMIN,
    )

    current = client.get("/joker-draw").json()["data"]
    history = client.get("/joker-draw/history", params={"limit": 5}).json()["data"]

    assert image["path"].startswith("joker-draw/joker-winner-")
    assert updated.status_code == 200
    assert current["lastWinner"] == "Bob"
    assert current["currentJackpot"] == 600
    assert current["winnerImageUrl"] == image["url"]
    assert [entry["lastWinner"] for entry in history] == ["Bob", "Alice"]


def test_joker_draw_rejects_negative_amounts(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/joker-draw",
        json={"lastWinner": "Alice", "lastWinAmount": -1, "currentJackpot": 450},
        headers=ADMIN,
    )

    assert response.status_code == 422
    assert response.json()["message"] == "Invalid input values"


def test_joker_draw_rejects_non_finite_amounts(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/joker-draw",
        content=(
            '{"lastWinner": "Alice", "lastWinAmount": NaN, "currentJackpot": 450}'
        ),
        headers={**ADMIN, "Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json()["message"] == "Invalid input"
    assert response.json()["data"][0]["loc"] == ["body", "lastWinAmount"]
    assert client.get("/joker-draw").json()["data"] is None
