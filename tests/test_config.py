import pytest

from resumegen.config import load_resume, load_settings
from resumegen.errors import ConfigNotFound, ConfigParseError, ConfigReadError, SiteBuildError


def test_load_resume(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text('{"personal": {"fullName": "Ann"}}', encoding="utf-8")
    assert load_resume(path) == {"personal": {"fullName": "Ann"}}


def test_missing_resume_is_fatal(tmp_path):
    with pytest.raises(ConfigNotFound) as excinfo:
        load_resume(tmp_path / "missing.json")
    assert "missing.json" in str(excinfo.value)
    assert isinstance(excinfo.value, SiteBuildError)


def test_parse_error_carries_hints(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text('{\n  "personal": {"fullName": "Ann",}\n}', encoding="utf-8")
    with pytest.raises(ConfigParseError) as excinfo:
        load_resume(path)
    message = str(excinfo.value)
    assert "line 2" in message
    assert "Missing comma" in message
    assert "Trailing comma" in message
    assert "Missing double quotes" in message
    assert "Unclosed bracket" in message
    assert "https://jsonlint.com" in message


def test_non_object_root_is_parse_error(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_resume(path)


def test_unreadable_resume(tmp_path):
    path = tmp_path / "resume.json"
    path.mkdir()
    with pytest.raises(ConfigReadError):
        load_resume(path)


def test_undecodable_resume(tmp_path):
    path = tmp_path / "resume.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(ConfigReadError):
        load_resume(path)


def test_settings_missing_file(tmp_path):
    assert load_settings(tmp_path / "site.toml") == {}


def test_settings_toml(tmp_path):
    path = tmp_path / "site.toml"
    path.write_text('output = "public"\ndebounce_ms = 250\nwatch = ["src"]\n', encoding="utf-8")
    assert load_settings(path) == {"output": "public", "debounce_ms": 250, "watch": ["src"]}


def test_settings_yaml(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("output: public\nwatch:\n  - src\n  - config\n", encoding="utf-8")
    assert load_settings(path) == {"output": "public", "watch": ["src", "config"]}


def test_settings_invalid_toml_exits(tmp_path, capsys):
    path = tmp_path / "site.toml"
    path.write_text("output = \n", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_settings(path)
    assert "Invalid TOML" in capsys.readouterr().err
