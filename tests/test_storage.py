from __future__ import annotations

import json

from toweroops import Game, Settings, Statistics, Storage
from toweroops.types import DEFAULT_AI_LEVEL
from toweroops.storage import CONFIG_DIR_ENV, default_config_dir


def test_missing_files_load_defaults(tmp_path):
    storage = Storage(tmp_path / "nowhere")
    assert storage.load_settings() == Settings()
    assert storage.load_statistics() == Statistics()
    assert storage.load_settings().ai_level == 2
    assert storage.load_settings().animation_speed == 0.2


def test_settings_round_trip_keeps_unknown_keys(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "ai_level": 4,
        "animation_speed": 0.5,
        "window_width": 800,
        "window_height": None,
        "theme": "dark",
    }))
    storage = Storage(tmp_path)
    settings = storage.load_settings()
    assert settings.ai_level == 4
    assert settings.window_width == 800
    assert settings.window_height is None
    assert settings.extra == {"theme": "dark"}

    settings.ai_level = 1
    storage.save_settings(settings)
    data = json.loads(path.read_text())
    assert data["ai_level"] == 1
    assert data["theme"] == "dark"
    assert data["animation_speed"] == 0.5


def test_statistics_round_trip_creates_directory(tmp_path):
    storage = Storage(tmp_path / "deep" / "dir")
    storage.save_statistics(Statistics(player_wins=3, computer_wins=1, draws=2))
    assert storage.statistics_path.is_file()
    assert storage.load_statistics() == Statistics(3, 1, 2)


def test_corrupt_files_fall_back_to_defaults(tmp_path, caplog):
    (tmp_path / "settings.json").write_text("{not json")
    (tmp_path / "statistics.json").write_text('["a list"]')
    storage = Storage(tmp_path)
    with caplog.at_level("WARNING"):
        assert storage.load_settings() == Settings()
        assert storage.load_statistics() == Statistics()
    assert len(caplog.records) == 2


def test_wrongly_typed_values_fall_back_to_defaults(tmp_path):
    (tmp_path / "settings.json").write_text(json.dumps({"ai_level": "hard"}))
    assert Storage(tmp_path).load_settings() == Settings()


def test_config_dir_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    assert default_config_dir() == tmp_path
    assert Storage().directory == tmp_path


def test_config_dir_follows_xdg(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_dir() == tmp_path / "tower-oops"


def test_settings_and_game_share_the_default_level():
    assert Settings().ai_level == Game().ai_level == DEFAULT_AI_LEVEL
