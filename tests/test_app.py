"""Tests for the HTTP API."""
import pytest
from fastapi.testclient import TestClient

from color_predictor.backend.app import create_app
from color_predictor.backend.session import ColorSession
from tests.conftest import DISLIKED, LIKED


@pytest.fixture
def session(models_dir):
    return ColorSession(model_id="api-model", models_dir=models_dir)


@pytest.fixture
def client(session):
    return TestClient(create_app(session))


def record_all(client):
    for color in LIKED:
        assert client.post("/colors", json={"color": color, "liked": True}).status_code == 200
    for color in DISLIKED:
        assert client.post("/colors", json={"color": color, "liked": False}).status_code == 200


def test_root_and_health(client):
    root = client.get("/").json()
    health = client.get("/health").json()

    assert root["model_state"] == "fresh"
    assert root["model_id"] == "api-model"
    assert health["status"] == "healthy"
    assert health["model_loaded"] is True
    assert health["training"] is False


def test_next_color_becomes_the_default_sample(client, session):
    color = client.get("/colors/next").json()["color"]

    response = client.post("/colors", json={"liked": True})

    assert response.json()["samples"]["liked"] == 1
    assert session.liked == [color]


def test_invalid_color_is_a_bad_request(client):
    response = client.post("/colors", json={"color": "purple-ish", "liked": False})

    assert response.status_code == 400
    assert "Invalid color format" in response.json()["detail"]


def test_training_needs_enough_samples(client):
    client.post("/colors", json={"color": "#fff", "liked": True})

    response = client.post("/train", json={"epochs": 1})

    assert response.status_code == 400


def test_training_conflict(client, session):
    record_all(client)

    with session._training:
        response = client.post("/train", json={"epochs": 1})

    assert response.status_code == 409


def test_train_then_predict(client, models_dir):
    record_all(client)

    trained = client.post("/train", json={"epochs": 2, "batch_size": 4})

    assert trained.status_code == 200
    body = trained.json()
    assert body["model_state"] == "trained"
    assert body["model"]["trained_samples"] == 8
    assert (models_dir / "api-model.keras").exists()

    stats = client.get("/stats").json()
    assert stats["samples"]["can_train"] is True
    assert stats["model"]["trained_samples"] == 8
    assert stats["model"]["dropped"] == 0

    prediction = client.post("/predict", json={"color": "#ff2200"}).json()
    assert prediction["success"] is True
    assert 0.0 <= prediction["score"] <= 1.0
    assert prediction["prediction"] in ("like", "dislike")
    assert prediction["color"] == "#ff2200"


def test_train_request_validation(client):
    assert client.post("/train", json={"epochs": 0}).status_code == 422
    assert client.post("/train", json={"validation_split": 1.5}).status_code == 422


def test_predict_invalid_color(client):
    response = client.post("/predict", json={"color": "#12345"})

    assert response.status_code == 400


def test_predict_untrained_model(client):
    response = client.post("/predict", json={"color": "#abcdef"})

    assert response.status_code == 200
    assert 0.0 <= response.json()["confidence"] <= 1.0


def test_reset(client):
    record_all(client)

    response = client.delete("/colors")

    assert response.json()["samples"]["total_samples"] == 0


def test_stats_before_training(client):
    stats = client.get("/stats").json()

    assert stats["model"] is None
    assert stats["model_state"] == "fresh"
