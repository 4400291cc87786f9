from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from ticketdesk.dependencies.tickets import get_ticket_service
from ticketdesk.main import create_app
from ticketdesk.tickets import TicketId, TicketNotFoundError


def test_end_to_end_ticket_flow(client):
    response = client.post("/tickets", json={"title": "Fix bug", "description": "NPE on login"})
    assert response.status_code == 201
    created = {"id": 0, "title": "Fix bug", "description": "NPE on login", "status": "ToDo"}
    assert response.json() == created

    response = client.get("/tickets/0")
    assert response.status_code == 200
    assert response.json() == created

    response = client.patch("/tickets/0", json={"status": "InProgress"})
    assert response.status_code == 200
    assert response.json() == {**created, "status": "InProgress"}

    response = client.get("/tickets/999")
    assert response.status_code == 404
    assert response.content == b""

    response = client.post("/tickets", json={"title": "", "description": "x"})
    assert response.status_code == 400


def test_ids_increase_per_created_ticket(client):
    ids = [
        client.post("/tickets", json={"title": f"T{n}", "description": "d"}).json()["id"]
        for n in range(3)
    ]
    assert ids == [0, 1, 2]


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"title": "", "description": "x"}, "Invalid title: The title cannot be empty"),
        ({"title": "x" * 51, "description": "x"}, "Invalid title: The title cannot be longer than 50 bytes"),
        ({"title": "ok", "description": ""}, "Invalid description: The description cannot be empty"),
    ],
)
def test_create_ticket_reports_failing_field(client, payload, message):
    response = client.post("/tickets", json=payload)

    assert response.status_code == 400
    assert response.json() == message


def test_create_ticket_requires_both_fields(client):
    response = client.post("/tickets", json={"title": "only title"})
    assert response.status_code == 422


def test_patch_updates_only_provided_fields(client):
    client.post("/tickets", json={"title": "Fix bug", "description": "NPE on login"})

    response = client.patch("/tickets/0", json={"title": "Fix login NPE"})

    assert response.status_code == 200
    assert response.json() == {
        "id": 0,
        "title": "Fix login NPE",
        "description": "NPE on login",
        "status": "ToDo",
    }


def test_patch_with_invalid_field_changes_nothing(client):
    client.post("/tickets", json={"title": "Fix bug", "description": "NPE on login"})

    response = client.patch("/tickets/0", json={"title": "New", "description": "", "status": "Done"})

    assert response.status_code == 400
    assert response.json().startswith("Invalid description:")
    assert client.get("/tickets/0").json()["status"] == "ToDo"
    assert client.get("/tickets/0").json()["title"] == "Fix bug"


def test_patch_missing_ticket_returns_404(client):
    response = client.patch("/tickets/7", json={"status": "Done"})

    assert response.status_code == 404
    assert response.content == b""


def test_patch_rejects_unknown_status(client):
    client.post("/tickets", json={"title": "Fix bug", "description": "NPE on login"})

    response = client.patch("/tickets/0", json={"status": "Closed"})

    assert response.status_code == 422


@pytest.mark.parametrize("raw_id", ["-1", "abc", str(2**64)])
def test_get_rejects_non_u64_ids(client, raw_id):
    assert client.get(f"/tickets/{raw_id}").status_code == 422


def test_ping(client):
    response = client.get("/ping")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_metrics_endpoint_reports_ticket_counters(client):
    client.post("/tickets", json={"title": "Fix bug", "description": "NPE on login"})
    client.get("/tickets/42")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "tickets_created_total 1.0" in response.text
    assert 'ticket_lookups_total{outcome="miss"} 1.0' in response.text


@pytest.fixture
def mocked_client():
    app = create_app()
    service = AsyncMock()

    async def override_service():
        return service

    app.dependency_overrides[get_ticket_service] = override_service
    client = TestClient(app)
    try:
        yield client, service
    finally:
        app.dependency_overrides.clear()


def test_get_ticket_maps_not_found(mocked_client):
    client, service = mocked_client
    service.get_ticket = AsyncMock(side_effect=TicketNotFoundError(TicketId(3)))

    response = client.get("/tickets/3")

    assert response.status_code == 404
    service.get_ticket.assert_awaited_with(TicketId(3))


def test_missing_service_returns_503():
    app = create_app()
    app.state.ticket_service = None
    client = TestClient(app)

    assert client.get("/tickets/0").status_code == 503


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ('{"title": "\\ud800", "description": "x"}', "Invalid title: The title must be valid UTF-8 text"),
        ('{"title": "ok", "description": "a\\udfffb"}', "Invalid description: The description must be valid UTF-8 text"),
    ],
)
def test_create_ticket_rejects_unencodable_text(client, body, message):
    response = client.post("/tickets", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json() == message
    assert client.get("/tickets/0").status_code == 404


def test_patch_rejects_unencodable_title(client):
    client.post("/tickets", json={"title": "Fix bug", "description": "NPE on login"})

    response = client.patch(
        "/tickets/0", content='{"title": "\\ud83d"}', headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == "Invalid title: The title must be valid UTF-8 text"
    assert client.get("/tickets/0").json()["title"] == "Fix bug"


def test_validation_errors_are_plain_json_strings(client):
    response = client.post("/tickets", json={"title": "", "description": "x"})

    assert response.status_code == 400
    assert response.headers["content-type"] == "application/json"
    assert isinstance(response.json(), str)
