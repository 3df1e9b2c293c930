import json

from treeviz.settings import THEMES, Settings


def test_defaults_without_file(settings):
    assert settings.theme == "dark"
    assert settings.anim_speed == 3
    assert settings.auto_play is True
    assert settings.get("BG") == THEMES["dark"]["BG"]


def test_save_and_reload(settings):
    settings.theme = "light"
    settings.anim_speed = 5
    settings.custom_colors = {"HIGHLIGHT": "#123456"}
    settings.save()
    again = Settings(settings.path)
    assert again.theme == "light"
    assert again.anim_speed == 5
    assert again.get("HIGHLIGHT") == "#123456"
    assert again.get("BG") == THEMES["light"]["BG"]


def test_unknown_key_and_theme_fall_back(settings):
    assert settings.get("NOPE") == "#ffffff"
    settings.theme = "neon"
    assert settings.get("FG") == THEMES["dark"]["FG"]


def test_out_of_range_speed_is_clamped(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"anim_speed": 12}))
    assert Settings(str(path)).anim_speed == 5


def test_broken_file_keeps_defaults(tmp_path, caplog):
    path = tmp_path / "s.json"
    path.write_text("{not json")
    s = Settings(str(path))
    assert s.theme == "dark"
    assert "ignoring unreadable settings file" in caplog.text


def test_env_var_overrides_path(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"theme": "light"}))
    monkeypatch.setenv("TREEVIZ_SETTINGS", str(path))
    assert Settings().theme == "light"


def test_toggle_theme_round_trips(settings):
    assert settings.toggle_theme() == "light"
    assert settings.get("BG") == THEMES["light"]["BG"]
    settings.save()
    assert Settings(settings.path).theme == "light"
    assert settings.toggle_theme() == "dark"


def test_reset_colors_restores_theme(settings):
    settings.custom_colors["BG"] = "#000000"
    assert settings.get("BG") == "#000000"
    settings.reset_colors()
    assert settings.get("BG") == THEMES["dark"]["BG"]
