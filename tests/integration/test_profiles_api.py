"""
Integration tests for the Profiles API endpoints.

Tests the /profiles/* endpoints against a container of in-memory stores.
"""
import pytest
from fastapi.testclient import TestClient

from api.deps import get_container, get_sync_queue
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import FakeSyncQueue, create_container, make_profile, make_record


VALID = {"name": "Sam", "age": 30, "height": 180, "weight": 80}


@pytest.fixture
def container():
    return create_container()


@pytest.fixture
def app(container):
    app = create_app(Settings(environment="test", _env_file=None))
    app.dependency_overrides[get_container] = lambda: container
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def profile_id(client):
    return client.post("/profiles", json=VALID).json()["id"]


@pytest.mark.integration
class TestCreateProfile:
    """Tests for POST /profiles."""

    def test_create(self, client):
        response = client.post("/profiles", json={**VALID, "sex": "female"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("profile_")
        assert data["sex"] == "female"
        assert data["exercise_ratings"] == {}

    def test_missing_fields(self, client):
        response = client.post("/profiles", json={"name": "Sam"})

        assert response.status_code == 400
        assert response.json()["detail"]["errors"] == [
            "Age is required",
            "Height is required",
            "Weight is required",
        ]

    def test_out_of_range(self, client):
        response = client.post("/profiles", json={**VALID, "weight": 301})
        assert response.status_code == 400
        assert "Weight must be between 30 and 300 kg" in response.json()["detail"]["errors"]

    def test_limit_returns_409(self, client):
        for i in range(10):
            assert client.post("/profiles", json={**VALID, "name": f"P{i}"}).status_code == 201

        response = client.post("/profiles", json=VALID)
        assert response.status_code == 409
        assert response.json()["detail"] == "Maximum of 10 profiles allowed"


@pytest.mark.integration
class TestReadUpdateDelete:
    """Tests for GET/PATCH/DELETE /profiles/{id}."""

    def test_list_and_get(self, client, profile_id):
        assert [p["id"] for p in client.get("/profiles").json()] == [profile_id]
        assert client.get(f"/profiles/{profile_id}").json()["name"] == "Sam"

    def test_get_unknown(self, client):
        assert client.get("/profiles/missing").status_code == 404

    def test_patch_only_sent_fields(self, client, profile_id):
        response = client.patch(f"/profiles/{profile_id}", json={"weight": 82.5})

        assert response.status_code == 200
        assert response.json()["weight"] == 82.5
        assert response.json()["age"] == 30

    def test_patch_invalid(self, client, profile_id):
        assert client.patch(f"/profiles/{profile_id}", json={"age": 7}).status_code == 400

    def test_patch_unknown(self, client):
        assert client.patch("/profiles/missing", json={"weight": 80}).status_code == 404

    def test_delete(self, client, profile_id):
        assert client.delete(f"/profiles/{profile_id}").status_code == 204
        assert client.get(f"/profiles/{profile_id}").status_code == 404
        assert client.delete(f"/profiles/{profile_id}").status_code == 404


@pytest.mark.integration
class TestRatings:
    """Tests for /profiles/{id}/ratings/{exercise_id}."""

    def test_set_and_remove(self, client, profile_id):
        response = client.put(f"/profiles/{profile_id}/ratings/squat", json={"level": "novice"})
        assert response.json()["exercise_ratings"] == {"squat": "novice"}

        response = client.delete(f"/profiles/{profile_id}/ratings/squat")
        assert response.json()["exercise_ratings"] == {}

    def test_invalid_level(self, client, profile_id):
        response = client.put(f"/profiles/{profile_id}/ratings/squat", json={"level": "elite"})
        assert response.status_code == 422

    def test_unknown_profile(self, client):
        response = client.put("/profiles/missing/ratings/squat", json={"level": "novice"})
        assert response.status_code == 404


@pytest.mark.integration
class TestSync:
    """Tests for POST /profiles/sync."""

    def test_offline_queue_keeps_changes(self, client, profile_id):
        data = client.post("/profiles/sync").json()
        assert data == {"pushed": False, "pulled": False, "pending": 1, "workouts_added": 0}

    def test_push_then_merge_snapshot(self, app, client, container, profile_id):
        queue = FakeSyncQueue()
        queue.enqueue("profile", "create", {"id": profile_id})
        queue.seed_snapshot(
            profiles=[make_profile(profile_id="cloud_1", name="Alex").model_dump(mode="json")],
            workouts=[make_record("cloud_1", "squat", "2026-02-20", [100]).model_dump(mode="json")],
        )
        app.dependency_overrides[get_sync_queue] = lambda: queue

        data = client.post("/profiles/sync").json()

        assert data == {"pushed": True, "pulled": True, "pending": 0, "workouts_added": 1}
        assert {p["id"] for p in client.get("/profiles").json()} == {profile_id, "cloud_1"}
        assert container.history.get_exercise_pr("cloud_1", "squat") == 100
