from pathlib import Path

import pytest

from resumegen.validate import (
    check_profile_image,
    is_valid_color,
    is_valid_email,
    is_valid_url,
    print_results,
    validate_config,
)


def test_sample_config_is_clean(sample_config):
    result = validate_config(sample_config)
    assert result.errors == []
    assert result.warnings == []
    assert result.ok


def test_missing_email_is_an_error(sample_config):
    del sample_config["personal"]["email"]
    result = validate_config(sample_config)
    assert not result.ok
    assert any("personal.email" in message for message in result.errors)


def test_malformed_email_is_a_warning(sample_config):
    sample_config["personal"]["email"] = "not-an-email"
    result = validate_config(sample_config)
    assert result.ok
    assert any("personal.email" in message for message in result.warnings)


def test_empty_experience_and_education_warn(sample_config):
    sample_config["experience"] = []
    sample_config["education"] = []
    result = validate_config(sample_config)
    assert result.ok
    assert "experience array is empty" in result.warnings
    assert "education array is empty" in result.warnings


@pytest.mark.parametrize("section", ["personal", "experience", "education", "skills", "settings"])
def test_missing_required_section(sample_config, section):
    del sample_config[section]
    result = validate_config(sample_config)
    assert f"Missing required section: {section}" in result.errors


def test_missing_summary_is_only_a_warning(sample_config):
    del sample_config["summary"]
    result = validate_config(sample_config)
    assert result.ok
    assert "Missing optional section: summary" in result.warnings


def test_job_fields(sample_config):
    sample_config["experience"].append({"title": "Dev", "achievements": "lots"})
    result = validate_config(sample_config)
    assert "experience[2].company is required and must be a string" in result.errors
    assert "experience[2].startDate is required and must be a string" in result.errors
    assert "experience[2].achievements must be an array" in result.errors


def test_experience_must_be_a_list(sample_config):
    sample_config["experience"] = {"title": "Dev"}
    assert "experience must be an array" in validate_config(sample_config).errors


def test_skills_categories(sample_config):
    sample_config["skills"]["categories"].append({"name": "Tools", "items": "vim"})
    result = validate_config(sample_config)
    assert "skills.categories[2].items is required and must be an array" in result.errors


def test_projects(sample_config):
    sample_config["projects"].append({"title": "x", "url": "not a url", "technologies": "py"})
    result = validate_config(sample_config)
    assert "projects[1].description is required and must be a string" in result.errors
    assert "projects[1].technologies must be an array" in result.errors
    assert "projects[1].url does not appear to be a valid URL" in result.warnings


def test_settings(sample_config):
    sample_config["settings"]["colors"]["accent"] = "blue"
    sample_config["settings"]["seo"]["canonicalUrl"] = "alexmorgan.github.io"
    del sample_config["settings"]["seo"]["title"]
    result = validate_config(sample_config)
    assert "settings.seo.title is required and must be a string" in result.errors
    assert "settings.colors.accent does not appear to be a valid color code" in result.warnings
    assert "settings.seo.canonicalUrl does not appear to be a valid URL" in result.warnings


def test_social_links(sample_config):
    sample_config["personal"]["social"]["github"] = "github.com/alexmorgan"
    result = validate_config(sample_config)
    assert result.warnings == ["personal.social.github does not appear to be a valid URL"]


def test_location_required(sample_config):
    sample_config["personal"]["location"] = "Oslo"
    assert "personal.location is required and must be an object" in validate_config(sample_config).errors


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://example.com", True),
        ("https://example.com/path?q=1", True),
        ("mailto:ann@example.com", True),
        ("https://", False),
        ("example.com", False),
        ("not a url", False),
        ("", False),
    ],
)
def test_is_valid_url(value, expected):
    assert is_valid_url(value) is expected


def test_is_valid_email():
    assert is_valid_email("ann@example.com")
    assert not is_valid_email("ann@example")
    assert not is_valid_email("ann @example.com")


@pytest.mark.parametrize("value, expected", [("#fff", True), ("#A1b2C3", True), ("#ffff", False), ("fff", False), ("#ggg", False)])
def test_is_valid_color(value, expected):
    assert is_valid_color(value) is expected


def test_profile_image_present(sample_config, project):
    src = Path(project.src)
    assert check_profile_image(sample_config, src, src / "images") is None


def test_profile_image_missing_file(sample_config, tmp_path):
    sample_config["personal"]["profileImage"] = "images/me.jpg"
    message = check_profile_image(sample_config, tmp_path, tmp_path / "images")
    assert "not found" in message
    assert "images/me.jpg" in message


def test_profile_image_not_specified(sample_config, tmp_path):
    del sample_config["personal"]["profileImage"]
    assert "No profile image specified" in check_profile_image(sample_config, tmp_path, tmp_path / "images")


def test_profile_image_relative_to_image_root(sample_config, tmp_path):
    (tmp_path / "images").mkdir()
    (tmp_path / "images" / "me.png").write_bytes(b"png")
    sample_config["personal"]["profileImage"] = "me.png"
    assert check_profile_image(sample_config, tmp_path, tmp_path / "images") is None


def test_print_results(capsys, sample_config):
    sample_config["personal"]["email"] = "nope"
    print_results(validate_config(sample_config))
    out = capsys.readouterr().out
    assert "Found 1 warning(s)" in out
    assert "valid enough to build" in out
