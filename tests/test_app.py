import pytest
from fastapi.testclient import TestClient

from app import create_app


@pytest.fixture
def client(db_path):
    with TestClient(create_app(str(db_path))) as c:
        yield c


def test_health(client, db_path):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db_path": str(db_path)}


def test_geocode_block(client):
    resp = client.post("/geocode", json={"address": "東京都千代田区丸の内２−３"})
    assert resp.status_code == 200
    assert resp.json() == {
        "address": "東京都千代田区丸の内２−３",
        "matched": "東京都千代田区丸の内二丁目3",
        "latitude": 35.68311,
        "longitude": 139.76388,
        "level": 0,
    }


def test_geocode_unmatched(client):
    resp = client.post("/geocode", json={"address": "大阪府大阪市北区梅田1-1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["matched"] is None
    assert body["level"] is None


def test_empty_address(client):
    resp = client.post("/geocode", json={"address": "   "})
    assert resp.status_code == 400


def test_ambiguous_address(client):
    resp = client.post("/geocode", json={"address": "東京都八王子市"})
    assert resp.status_code == 409
    assert "東京都八王子市本町西" in resp.json()["detail"]["candidates"]


def test_numeral_error(client):
    resp = client.post("/geocode", json={"address": "東京都千代田区丸の内0-1"})
    assert resp.status_code == 422
