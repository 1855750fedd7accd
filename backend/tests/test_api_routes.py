import pytest
from fastapi.testclient import TestClient

from parkwatch.api.routes import parking as parking_routes
from parkwatch.core.constants import KEY_PARKING_LOTS, KEY_SELECTED_LOT, history_key
from parkwatch.db.session import get_db
from parkwatch.main import app
from parkwatch.scheduler.refresh_job import RefreshResult

from conftest import SAMPLE_LOTS


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_lots_without_snapshot(client):
    body = client.get("/parking/lots").json()
    assert body["has_snapshot"] is False
    assert body["message"].startswith("No data available")


def test_lots_search_and_pin(client, store):
    store.set_many({KEY_PARKING_LOTS: SAMPLE_LOTS, KEY_SELECTED_LOT: "Reading"})

    body = client.get("/parking/lots").json()
    assert [lot["name"] for lot in body["lots"]] == ["Reading", "Dizengoff Center", "Habima"]

    body = client.get("/parking/lots", params={"q": "zzz"}).json()
    assert body["lots"] == []
    assert body["message"] == "No parking lots found matching your search."


def test_select_lot_updates_badge(client, store):
    store.set(KEY_PARKING_LOTS, SAMPLE_LOTS)

    response = client.put("/parking/selected", json={"name": "Dizengoff Center"})

    assert response.status_code == 200
    assert response.json()["badge"] == {"text": "42", "color": "#4CAF50", "severity": "green"}
    assert client.get("/parking/selected").json()["selected_lot"] == "Dizengoff Center"


def test_select_lot_requires_name(client):
    assert client.put("/parking/selected", json={"name": ""}).status_code == 422


def test_refresh_returns_cycle_result(client, monkeypatch):
    monkeypatch.setattr(parking_routes, "refresh", lambda: RefreshResult(status="ok", lot_count=3))
    body = client.post("/parking/refresh").json()
    assert body["status"] == "ok"
    assert body["lot_count"] == 3


def test_refresh_status(client):
    body = client.get("/parking/refresh/status").json()
    assert body["in_flight"] is False
    assert "next_refresh_at" in body


def test_stats_for_selected_lot(client, store):
    store.set_many({
        KEY_SELECTED_LOT: "Reading",
        history_key(3): {"8": [{"timestamp": 1, "spaces": s, "lotName": "Reading"} for s in (12, 18, 15)]},
    })

    body = client.get("/parking/stats", params={"day": 3, "metric": "average"}).json()

    assert body["lot"] == "Reading"
    assert body["has_data"] is True
    assert body["labels"][8] == "08:00"
    assert body["values"][8] == 15
    assert body["values"][9] is None
    assert body["colors"][8] == "#FF9800"
    assert body["colors"][9] == "#CCCCCC"


def test_stats_no_data_message(client):
    body = client.get("/parking/stats", params={"day": 1, "lot": "Habima", "period": "night"}).json()
    assert body["has_data"] is False
    assert len(body["values"]) == 12
    assert body["message"] == "No history specific to Habima for this day."


@pytest.mark.parametrize(
    "params",
    [{"day": 7}, {"day": 1, "metric": "median"}, {"day": 1, "period": "evening"}],
)
def test_stats_rejects_bad_arguments(client, params):
    assert client.get("/parking/stats", params=params).status_code == 422
