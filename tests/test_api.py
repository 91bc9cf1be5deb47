import pytest
from fastapi.testclient import TestClient

from countrysearch.api.deps import get_country_client
from countrysearch.core.config import Settings, get_settings
from countrysearch.main import app
from countrysearch.services.country_client import FetchError, HttpStatusError
from conftest import StubClient, make_record


@pytest.fixture
def stub():
    return StubClient(
        {
            "fra": [make_record("France"), make_record("French Guiana")],
            "France": [make_record("France", capital=("Paris",))],
        }
    )


@pytest.fixture
def client(stub):
    app.dependency_overrides[get_country_client] = lambda: stub
    app.dependency_overrides[get_settings] = lambda: Settings(DEBOUNCE_DELAY_MS=10)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_index_serves_search_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert 'id="search-box"' in response.text
    assert 'class="country-list"' in response.text
    assert 'class="country-info"' in response.text
    assert "/v1/live" in response.text


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/v1/health").json()["status"] == "healthy"


def test_lookup_returns_records(client, stub):
    response = client.get("/v1/countries", params={"name": "fra"})
    assert response.status_code == 200
    assert [c["common_name"] for c in response.json()] == ["France", "French Guiana"]
    assert stub.calls == ["fra"]


@pytest.mark.parametrize(
    "error, status",
    [(HttpStatusError(404), 404), (HttpStatusError(503), 502), (FetchError(), 502)],
)
def test_lookup_maps_upstream_errors(client, stub, error, status):
    stub.error = error
    assert client.get("/v1/countries", params={"name": "x"}).status_code == status


def test_live_session_search_then_select(client, stub):
    with client.websocket_connect("/v1/live") as ws:
        ws.send_json({"type": "input", "value": "fra"})
        list_patch = ws.receive_json()
        detail_patch = ws.receive_json()
        notice = ws.receive_json()

        assert list_patch["target"] == "country-list"
        assert 'id="France"' in list_patch["html"]
        assert list_patch["style"].startswith("display:flex")
        assert detail_patch == {"type": "patch", "target": "country-info", "html": "", "style": None}
        assert notice == {"type": "notify", "level": "success", "message": "2 countries found."}

        ws.send_json({"type": "select", "id": "France"})
        list_patch = ws.receive_json()
        detail_patch = ws.receive_json()

        assert list_patch["html"] == ""
        assert ">Paris</p>" in detail_patch["html"]

    assert stub.calls == ["fra", "France"]


def test_live_session_ignores_invalid_messages(client, stub):
    with client.websocket_connect("/v1/live") as ws:
        ws.send_text("not json")
        ws.send_json({"type": "scroll"})
        ws.send_json({"type": "input", "value": "   "})
        patch = ws.receive_json()

        assert patch["target"] == "country-list"
        assert patch["html"] == ""

    assert stub.calls == []


def test_live_session_survives_binary_frames(client, stub):
    with client.websocket_connect("/v1/live") as ws:
        ws.send_bytes(b"\x00\x01")
        ws.send_json({"type": "input", "value": "fra"})
        list_patch = ws.receive_json()

        assert list_patch["target"] == "country-list"
        assert 'id="France"' in list_patch["html"]

    assert stub.calls == ["fra"]
