from __future__ import annotations

from pathlib import Path


class SiteBuildError(Exception):
    """Base class for conditions that abort a build."""


class ConfigNotFound(SiteBuildError):
    def __init__(self, path: Path):
        super().__init__(f"Configuration file not found: {path}")
        self.path = path


class ConfigReadError(SiteBuildError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not read configuration file {path}: {reason}")
        self.path = path


class ConfigParseError(SiteBuildError):
    def __init__(self, path: Path, detail: str, hints: str = ""):
        message = f"Invalid JSON in configuration file {path}: {detail}"
        if hints:
            message = f"{message}\n{hints}"
        super().__init__(message)
        self.path = path
        self.detail = detail


class TemplateNotFound(SiteBuildError):
    def __init__(self, path: Path):
        super().__init__(f"Template file not found: {path}")
        self.path = path


class TemplateSyntaxError(SiteBuildError):
    pass
