"""
Unit tests for backend/core/timer_settings.py
"""
import pytest
from pydantic import ValidationError

from backend.core.timer_settings import TimerSettingsStore, format_time
from domain.models import TimerSettings
from infrastructure.storage import InMemoryDocumentStore


@pytest.fixture
def settings_store():
    return InMemoryDocumentStore()


@pytest.fixture
def timer(settings_store):
    return TimerSettingsStore(settings_store, InMemoryDocumentStore())


@pytest.mark.unit
class TestTimerSettings:
    """Tests for settings read/write."""

    def test_defaults_when_nothing_stored(self, timer):
        assert timer.get_timer_settings() == TimerSettings()

    def test_partial_save_keeps_other_fields(self, timer):
        timer.save_timer_settings({"default_duration": 120})
        saved = timer.save_timer_settings({"sound_enabled": False})

        assert saved.default_duration == 120
        assert saved.sound_enabled is False
        assert timer.get_timer_settings() == saved

    def test_out_of_range_rejected(self, timer):
        with pytest.raises(ValidationError):
            timer.save_timer_settings({"default_duration": 2})
        assert timer.get_timer_settings().default_duration == 90

    def test_bad_stored_field_falls_back_to_default(self, settings_store, timer):
        """One bad value does not discard the rest of the stored settings."""
        settings_store.save_all([
            {"default_duration": "soon", "vibration_enabled": False, "legacy": 1}
        ])

        settings = timer.get_timer_settings()
        assert settings.default_duration == 90
        assert settings.vibration_enabled is False

    def test_reset(self, timer):
        timer.save_timer_settings({"default_duration": 200})
        assert timer.reset_timer_settings() == TimerSettings()
        assert timer.get_timer_settings().default_duration == 90


@pytest.mark.unit
class TestExerciseTimerHistory:
    """Tests for per-exercise durations."""

    def test_default_duration_without_history(self, timer):
        timer.save_timer_settings({"default_duration": 75})
        assert timer.get_exercise_timer_duration("squat") == 75

    def test_remembers_last_duration(self, timer):
        timer.save_exercise_timer_duration("squat", 180)
        timer.save_exercise_timer_duration("squat", 150)
        timer.save_exercise_timer_duration("bench-press", 120)

        assert timer.get_exercise_timer_duration("squat") == 150
        assert timer.get_exercise_timer_duration("bench-press") == 120

    def test_reset_history(self, timer):
        timer.save_exercise_timer_duration("squat", 180)
        timer.reset_timer_history()
        assert timer.get_exercise_timer_duration("squat") == 90


@pytest.mark.unit
class TestFormatTime:
    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "0:00"), (5, "0:05"), (90, "1:30"), (600, "10:00"), (-5, "-0:05"), (-75, "-1:15")],
    )
    def test_format(self, seconds, expected):
        assert format_time(seconds) == expected
