"""Settings loading tests."""

import pytest
from pydantic import ValidationError

from downhill.core.constants import GAME_WIDTH, STARTING_SPEED
from downhill.settings import GameplaySettings, Settings, get_settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.debug is False
        assert settings.sprites_path is None
        assert settings.display.width == GAME_WIDTH
        assert settings.gameplay.starting_speed == STARTING_SPEED

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("DOWNHILL_DEBUG", "true")
        monkeypatch.setenv("DOWNHILL_SPRITES_PATH", "/tmp/sprites")
        settings = Settings(_env_file=None)

        assert settings.debug is True
        assert str(settings.sprites_path) == "/tmp/sprites"

    def test_reads_nested_environment(self, monkeypatch):
        monkeypatch.setenv("DOWNHILL_GAMEPLAY__SEED", "42")
        monkeypatch.setenv("DOWNHILL_DISPLAY__SCALE", "3")
        settings = Settings(_env_file=None)

        assert settings.gameplay.seed == 42
        assert settings.display.scale == 3

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("DOWNHILL_GAMEPLAY__RHINO_START_SCORE=50\n")
        settings = Settings(_env_file=env_file)
        assert settings.gameplay.rhino_start_score == 50

    @pytest.mark.parametrize("field,value", [
        ("starting_speed", 0),
        ("speed_increase_threshold", 0),
        ("obstacle_chance", 1.5),
        ("animation_frame_ms", -1),
    ])
    def test_rejects_invalid_gameplay_values(self, field, value):
        with pytest.raises(ValidationError):
            GameplaySettings(**{field: value})

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
