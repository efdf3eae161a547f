import pytest
import yaml

from shader_tune.__main__ import load_settings, parse_args
from shader_tune.settings import EditorSettings, SettingsError


def test_defaults():
    settings = EditorSettings()
    assert settings.auto_compile is True
    assert settings.debounce_interval == 1.0
    assert settings.log_level == "INFO"
    assert settings.compile_timeout is None
    assert settings.extensions == [".frag", ".glsl", ".metal"]


def test_missing_file_gives_defaults(tmp_path):
    settings = EditorSettings.load(tmp_path / "none.yaml")
    assert settings.as_dict() == EditorSettings().as_dict()


def test_yaml_values_override_defaults(tmp_path):
    path = tmp_path / "s.yaml"
    path.write_text("auto_compile: false\ndebounce_interval: 0.3\nlog_level: debug\n", encoding="utf-8")
    settings = EditorSettings.load(path)
    assert settings.auto_compile is False
    assert settings.debounce_interval == 0.3
    assert settings.log_level == "DEBUG"


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "s.yaml"
    path.write_text("theme: dark\nwidth: 320\n", encoding="utf-8")
    settings = EditorSettings.load(path)
    assert settings.width == 320
    assert not hasattr(settings, "theme")


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "s.yaml"
    path.write_text("", encoding="utf-8")
    assert EditorSettings.load(path).width == 640


@pytest.mark.parametrize("content", ["a: [unclosed", "- just\n- a list\n"])
def test_malformed_file_raises(tmp_path, content):
    path = tmp_path / "s.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SettingsError):
        EditorSettings.load(path)


@pytest.mark.parametrize("field, value", [
    ("debounce_interval", -1),
    ("compile_timeout", 0),
    ("log_level", "LOUD"),
    ("width", 0),
    ("api_port", "80"),
    ("language", "hlsl"),
])
def test_invalid_values_raise(field, value):
    with pytest.raises(SettingsError):
        EditorSettings(**{field: value})


def test_save_then_load(tmp_path):
    path = tmp_path / "s.yaml"
    EditorSettings(width=800, compile_timeout=2.5).save(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert data["width"] == 800
    assert EditorSettings.load(path).compile_timeout == 2.5


def test_command_line_overrides_file(tmp_path):
    path = tmp_path / "s.yaml"
    path.write_text("debounce_interval: 0.5\nwidth: 320\n", encoding="utf-8")
    args = parse_args(["--config", str(path), "--debounce", "2", "--no-auto-compile"])
    settings = load_settings(args)
    assert settings.debounce_interval == 2.0
    assert settings.width == 320
    assert settings.auto_compile is False
