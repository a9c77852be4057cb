from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from .config import JSON_HELP_URL

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")
SOCIAL_FIELDS = ("linkedin", "github", "twitter", "website")
COLOR_FIELDS = ("primary", "secondary", "accent")


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value))


def is_valid_url(value: object) -> bool:
    if not isinstance(value, str) or any(ch.isspace() for ch in value.strip()):
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    if not parsed.scheme or not SCHEME_RE.match(parsed.scheme):
        return False
    if parsed.scheme in {"http", "https", "ftp", "ws", "wss"}:
        return bool(parsed.netloc)
    return bool(parsed.netloc or parsed.path)


def is_valid_color(value: object) -> bool:
    return isinstance(value, str) and bool(COLOR_RE.match(value))


def _is_text(value: object) -> bool:
    return isinstance(value, str) and value != ""


def _require_text(result: ValidationResult, section: dict, key: str, label: str) -> bool:
    if not _is_text(section.get(key)):
        result.errors.append(f"{label} is required and must be a string")
        return False
    return True


def _validate_personal(personal: object, result: ValidationResult) -> None:
    if not isinstance(personal, dict):
        result.errors.append("Missing required section: personal")
        return
    _require_text(result, personal, "fullName", "personal.fullName")
    _require_text(result, personal, "title", "personal.title")
    if _require_text(result, personal, "email", "personal.email") and not is_valid_email(personal["email"]):
        result.warnings.append("personal.email does not appear to be a valid email address")
    if not _is_text(personal.get("phone")):
        result.warnings.append("personal.phone is missing or not a string")

    location = personal.get("location")
    if not isinstance(location, dict):
        result.errors.append("personal.location is required and must be an object")
    else:
        _require_text(result, location, "primary", "personal.location.primary")

    social = personal.get("social")
    if social is None:
        return
    if not isinstance(social, dict):
        result.errors.append("personal.social must be an object")
        return
    for name in SOCIAL_FIELDS:
        value = social.get(name)
        if value and not is_valid_url(value):
            result.warnings.append(f"personal.social.{name} does not appear to be a valid URL")


def _validate_summary(summary: object, result: ValidationResult) -> None:
    if not summary:
        result.warnings.append("Missing optional section: summary")
        return
    if not isinstance(summary, dict):
        result.errors.append("summary must be an object")
        return
    for key in ("professional", "about"):
        value = summary.get(key)
        if value and not isinstance(value, str):
            result.errors.append(f"summary.{key} must be a string")


def _validate_list(value: object, name: str, result: ValidationResult) -> bool:
    if value is None:
        result.errors.append(f"Missing required section: {name}")
        return False
    if not isinstance(value, list):
        result.errors.append(f"{name} must be an array")
        return False
    if not value:
        result.warnings.append(f"{name} array is empty")
    return True


def _validate_experience(experience: object, result: ValidationResult) -> None:
    if not _validate_list(experience, "experience", result):
        return
    for index, job in enumerate(experience):
        label = f"experience[{index}]"
        if not isinstance(job, dict):
            result.errors.append(f"{label} must be an object")
            continue
        for key in ("title", "company", "startDate"):
            _require_text(result, job, key, f"{label}.{key}")
        achievements = job.get("achievements")
        if achievements and not isinstance(achievements, list):
            result.errors.append(f"{label}.achievements must be an array")


def _validate_education(education: object, result: ValidationResult) -> None:
    if not _validate_list(education, "education", result):
        return
    for index, degree in enumerate(education):
        label = f"education[{index}]"
        if not isinstance(degree, dict):
            result.errors.append(f"{label} must be an object")
            continue
        _require_text(result, degree, "degree", f"{label}.degree")
        _require_text(result, degree, "institution", f"{label}.institution")


def _validate_skills(skills: object, result: ValidationResult) -> None:
    if not isinstance(skills, dict):
        result.errors.append("Missing required section: skills")
        return
    categories = skills.get("categories")
    if categories is None:
        return
    if not isinstance(categories, list):
        result.errors.append("skills.categories must be an array")
        return
    for index, category in enumerate(categories):
        label = f"skills.categories[{index}]"
        if not isinstance(category, dict):
            result.errors.append(f"{label} must be an object")
            continue
        _require_text(result, category, "name", f"{label}.name")
        if not isinstance(category.get("items"), list):
            result.errors.append(f"{label}.items is required and must be an array")


def _validate_projects(projects: object, result: ValidationResult) -> None:
    if not isinstance(projects, list):
        result.errors.append("projects must be an array")
        return
    for index, project in enumerate(projects):
        label = f"projects[{index}]"
        if not isinstance(project, dict):
            result.errors.append(f"{label} must be an object")
            continue
        _require_text(result, project, "title", f"{label}.title")
        _require_text(result, project, "description", f"{label}.description")
        technologies = project.get("technologies")
        if technologies and not isinstance(technologies, list):
            result.errors.append(f"{label}.technologies must be an array")
        url = project.get("url")
        if url and not is_valid_url(url):
            result.warnings.append(f"{label}.url does not appear to be a valid URL")


def _validate_settings(settings: object, result: ValidationResult) -> None:
    if not isinstance(settings, dict):
        result.errors.append("Missing required section: settings")
        return

    colors = settings.get("colors")
    if colors:
        if not isinstance(colors, dict):
            result.errors.append("settings.colors must be an object")
        else:
            for name in COLOR_FIELDS:
                value = colors.get(name)
                if value and not is_valid_color(value):
                    result.warnings.append(f"settings.colors.{name} does not appear to be a valid color code")

    seo = settings.get("seo")
    if not isinstance(seo, dict):
        result.errors.append("settings.seo is required and must be an object")
    else:
        _require_text(result, seo, "title", "settings.seo.title")
        _require_text(result, seo, "description", "settings.seo.description")
        canonical = seo.get("canonicalUrl")
        if canonical and not is_valid_url(canonical):
            result.warnings.append("settings.seo.canonicalUrl does not appear to be a valid URL")

    domain = settings.get("customDomain")
    if domain is not None and not isinstance(domain, str):
        result.errors.append("settings.customDomain must be a string")

    enabled = settings.get("sectionsEnabled")
    if enabled is not None and not isinstance(enabled, dict):
        result.errors.append("settings.sectionsEnabled must be an object")


def validate_config(config: dict) -> ValidationResult:
    result = ValidationResult()
    _validate_personal(config.get("personal"), result)
    _validate_summary(config.get("summary"), result)
    _validate_experience(config.get("experience"), result)
    _validate_education(config.get("education"), result)
    _validate_skills(config.get("skills"), result)
    if config.get("projects"):
        _validate_projects(config["projects"], result)
    _validate_settings(config.get("settings"), result)
    return result


def check_profile_image(config: dict, src_dir: Path, images_dir: Path) -> str | None:
    personal = config.get("personal") or {}
    image = personal.get("profileImage") if isinstance(personal, dict) else None
    if not image:
        return "No profile image specified (personal.profileImage)"
    relative = Path(str(image).lstrip("/"))
    if (src_dir / relative).is_file() or (images_dir / relative).is_file():
        return None
    return f"Profile image not found: {image} (the built page will have a broken image reference)"


def print_results(result: ValidationResult) -> None:
    if not result.errors and not result.warnings:
        print("Configuration is valid!")
        print("  No errors or warnings found.")
        return
    if result.errors:
        print(f"Found {len(result.errors)} error(s):")
        for index, message in enumerate(result.errors, 1):
            print(f"  {index}. {message}")
    if result.warnings:
        print(f"Found {len(result.warnings)} warning(s):")
        for index, message in enumerate(result.warnings, 1):
            print(f"  {index}. {message}")
    if result.errors:
        print("Please fix the errors before building.")
        print(f"Tip: Validate your JSON at {JSON_HELP_URL}")
    else:
        print("Configuration has warnings but is valid enough to build.")
