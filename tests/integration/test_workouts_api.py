"""
Integration tests for the Workouts API endpoints.

Tests /workouts/* end to end: logging sets through to history, the active
session, PRs and level changes on the profile.
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from api.deps import get_container
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import FakeClock, create_container, make_record


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 2, 18, 0))


@pytest.fixture
def container(clock):
    return create_container(clock)


@pytest.fixture
def client(container):
    app = create_app(Settings(environment="test", _env_file=None))
    app.dependency_overrides[get_container] = lambda: container

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def profile_id(container):
    return container.profiles.create_profile(
        {"name": "Sam", "age": 30, "height": 180, "weight": 80}
    ).id


def log(client, profile_id, exercise_id, weights, set_index=None, **extra):
    sets = [{"weight": w, "reps": 5} for w in weights]
    return client.post(
        "/workouts/log-set",
        json={
            "profile_id": profile_id,
            "exercise_id": exercise_id,
            "sets": sets,
            "set_index": len(sets) - 1 if set_index is None else set_index,
            **extra,
        },
    )


@pytest.mark.integration
class TestLogSetEndpoint:
    """Tests for POST /workouts/log-set."""

    def test_first_lift_levels_up(self, client, profile_id):
        response = log(client, profile_id, "bench-press", [85])

        assert response.status_code == 200
        data = response.json()
        assert data["record"]["date"] == "2026-03-02"
        assert data["is_pr"] is False
        assert data["level_up"] == "intermediate"
        assert data["session"]["exercises"]["bench-press"]["sets"][0]["weight"] == 85
        assert client.get(f"/profiles/{profile_id}").json()["exercise_ratings"] == {
            "bench-press": "intermediate"
        }

    def test_pr_against_earlier_day(self, client, container, profile_id):
        container.history.replace_all([make_record(profile_id, "squat", "2026-02-27", [100])])

        data = log(client, profile_id, "squat", [105]).json()

        assert data["is_pr"] is True
        assert data["pr_message"]
        assert data["session"]["prs_achieved"][0]["weight"] == 105

    def test_pounds_converted_to_kg(self, client, profile_id):
        data = log(client, profile_id, "squat", [225], unit="lbs").json()
        assert data["record"]["sets"][0]["weight"] == 102.1

    def test_blank_set_saved_without_session(self, client, profile_id):
        response = client.post(
            "/workouts/log-set",
            json={
                "profile_id": profile_id,
                "exercise_id": "squat",
                "sets": [{"weight": 100, "reps": None}],
                "set_index": 0,
            },
        )
        assert response.status_code == 200
        assert response.json()["session"] is None

    def test_unknown_profile(self, client):
        assert log(client, "missing", "squat", [100]).status_code == 404

    def test_unknown_exercise(self, client, profile_id):
        assert log(client, profile_id, "moon-squat", [100]).status_code == 404

    def test_bad_set_index(self, client, profile_id):
        assert log(client, profile_id, "squat", [100], set_index=3).status_code == 400

    def test_negative_weight_rejected(self, client, profile_id):
        assert log(client, profile_id, "squat", [-5]).status_code == 422


@pytest.mark.integration
class TestHistoryEndpoints:
    """Tests for history reads."""

    @pytest.fixture(autouse=True)
    def seeded(self, container, profile_id):
        container.history.replace_all([
            make_record(profile_id, "squat", "2026-02-20", [100]),
            make_record(profile_id, "squat", "2026-02-27", [110]),
            make_record(profile_id, "squat", "2026-03-02", [105]),
            make_record(profile_id, "bench-press", "2026-02-27", [80, 82.5]),
        ])

    def test_exercises_with_history(self, client, profile_id):
        assert client.get(f"/workouts/{profile_id}/exercises").json() == ["bench-press", "squat"]

    def test_sessions(self, client, profile_id):
        response = client.get(
            f"/workouts/{profile_id}/exercises/squat/sessions", params={"limit": 2}
        )
        assert [r["date"] for r in response.json()] == ["2026-03-02", "2026-02-27"]

    def test_today(self, client, profile_id):
        assert client.get(f"/workouts/{profile_id}/exercises/squat/today").json()["date"] == "2026-03-02"
        assert client.get(f"/workouts/{profile_id}/exercises/bench-press/today").json() is None

    def test_pr(self, client, profile_id):
        data = client.get(f"/workouts/{profile_id}/exercises/squat/pr").json()
        assert data == {"exercise_id": "squat", "max_weight": 110}

    def test_dates(self, client, profile_id):
        assert client.get(f"/workouts/{profile_id}/dates").json() == [
            "2026-03-02",
            "2026-02-27",
            "2026-02-20",
        ]

    def test_daily_summary(self, client, profile_id):
        data = client.get(f"/workouts/{profile_id}/daily/2026-02-27").json()
        assert data["display_date"] == "Feb 27"
        assert data["exercise_count"] == 2
        assert data["total_sets"] == 3

    def test_daily_summary_bad_date(self, client, profile_id):
        assert client.get(f"/workouts/{profile_id}/daily/2026-02-30").status_code == 400

    def test_daily_summary_empty_day(self, client, profile_id):
        assert client.get(f"/workouts/{profile_id}/daily/2026-01-01").status_code == 404

    def test_volume_history(self, client, profile_id):
        data = client.get(f"/workouts/{profile_id}/volume-history").json()
        assert [p["date"] for p in data] == ["2026-02-20", "2026-02-27", "2026-03-02"]


@pytest.mark.integration
class TestProgressionEndpoints:
    """Tests for level classification and demotion."""

    def test_level_for_weight(self, client, profile_id):
        response = client.get(
            f"/workouts/{profile_id}/exercises/bench-press/level", params={"weight": 85}
        )
        assert response.json() == {
            "exercise_id": "bench-press",
            "weight": 85,
            "level": "intermediate",
            "current_level": None,
        }

    def test_level_unknown_profile(self, client):
        response = client.get("/workouts/missing/exercises/bench-press/level", params={"weight": 85})
        assert response.status_code == 404

    def test_level_unknown_exercise(self, client, profile_id):
        response = client.get(f"/workouts/{profile_id}/exercises/nope/level", params={"weight": 85})
        assert response.status_code == 404

    def test_downgrade_applied(self, client, container, profile_id):
        container.profiles.update_exercise_rating(profile_id, "bench-press", "intermediate")
        container.history.replace_all([
            make_record(profile_id, "bench-press", f"2026-02-2{day}", [70])
            for day in range(4)
        ])

        data = client.post(f"/workouts/{profile_id}/exercises/bench-press/downgrade-check").json()

        assert data["downgraded"] is True
        assert data["previous_level"] == "intermediate"
        assert data["new_level"] == "novice"
        assert client.get(f"/profiles/{profile_id}").json()["exercise_ratings"]["bench-press"] == "novice"

    def test_no_downgrade_with_little_history(self, client, container, profile_id):
        container.profiles.update_exercise_rating(profile_id, "bench-press", "intermediate")
        data = client.post(f"/workouts/{profile_id}/exercises/bench-press/downgrade-check").json()
        assert data == {
            "exercise_id": "bench-press",
            "downgraded": False,
            "previous_level": None,
            "new_level": None,
            "message": None,
        }
