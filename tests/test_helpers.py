import math

import pytest

from resumegen.helpers import custom_color_styles, format_date, is_truthy


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2020", "2020"),
        ("2020-01", "Jan 2020"),
        ("2020-12", "Dec 2020"),
        ("2020-01-15", "Jan 2020"),
        ("2019-07-31", "Jul 2019"),
        ("Present", "Present"),
        ("", "Present"),
        (None, "Present"),
        ("not-a-date", "not-a-date"),
        ("2020-13", "2020-13"),
        ("2020-00", "2020-00"),
        ("2020-02-30", "2020-02-30"),
        ("March 2019", "Mar 2019"),
        ("2020-1", "Jan 2020"),
        ("2020-1-5", "Jan 2020"),
        ("2021-05-04T09:30:00", "May 2021"),
    ],
)
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_format_date_without_argument():
    assert format_date() == "Present"


@pytest.mark.parametrize("value", [None, False, 0, 0.0, "", math.nan])
def test_falsy_values(value):
    assert not is_truthy(value)


@pytest.mark.parametrize("value", [True, 1, -1, "0", "false", [], {}, [0], 0.5])
def test_truthy_values(value):
    """Empty lists and mappings are truthy, as in JavaScript."""
    assert is_truthy(value)


def test_color_styles_fill_missing_colors_with_defaults():
    styles = custom_color_styles({"primary": "#ff6600"})
    assert "--primary-color: #ff6600;" in styles
    assert "--secondary-color: #1e40af;" in styles
    assert "--accent-color: #3b82f6;" in styles
    assert styles.startswith("<style>")
    assert styles.endswith("</style>")


def test_color_styles_empty_without_colors():
    assert custom_color_styles(None) == ""


def test_color_styles_empty_mapping_uses_all_defaults():
    styles = custom_color_styles({})
    assert "#2563eb" in styles
    assert "#1e40af" in styles
    assert "#3b82f6" in styles
