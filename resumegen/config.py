from __future__ import annotations

import json
import sys
import tomllib
from pathlib import Path

import yaml

from .errors import ConfigNotFound, ConfigParseError, ConfigReadError

JSON_HELP_URL = "https://jsonlint.com"
JSON_HINTS = "\n".join(
    [
        "Common causes:",
        "  - Missing comma between properties or array items",
        "  - Trailing comma after the last property or array item",
        "  - Missing double quotes around a property name or string value",
        "  - Unclosed bracket or brace",
        f"Tip: Validate your JSON at {JSON_HELP_URL}",
    ]
)

DEFAULT_SETTINGS = {
    "data": "config/resume-data.json",
    "template": "src/index.html",
    "src": "src",
    "output": "dist",
    "debounce_ms": 500,
    "watch": ["src", "config", "templates"],
}


def load_settings(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in settings file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in settings file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML settings must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in settings file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON settings must be an object: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def load_resume(path: Path) -> dict:
    if not path.exists():
        raise ConfigNotFound(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(path, str(exc)) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        detail = f"{exc.msg} (line {exc.lineno}, column {exc.colno})"
        raise ConfigParseError(path, detail, JSON_HINTS) from exc
    if not isinstance(data, dict):
        raise ConfigParseError(path, "top-level value must be an object", JSON_HINTS)
    return data
