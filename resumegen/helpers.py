"""Template helpers.

Helpers are plain functions over parsed config data, looked up by name from
the two registries at the bottom of this module. Inline helpers return a
value that is written into the page; block helpers decide which branch of a
``{{#name}}...{{else}}...{{/name}}`` block is rendered and with what scope.
"""

from __future__ import annotations

import datetime as dt
import html
import math
import re
from typing import Any, Callable

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
PRESENT = "Present"

YEAR_RE = re.compile(r"^\d{4}$")
YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
YEAR_MONTH_DAY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
FALLBACK_DATE_FORMATS = (
    "%B %Y",
    "%b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
    "%m/%Y",
    "%Y/%m/%d",
    "%Y/%m",
    "%Y-%m",
    "%Y-%m-%d",
)

DEFAULT_COLORS = {
    "primary": "#2563eb",
    "secondary": "#1e40af",
    "accent": "#3b82f6",
}


def is_truthy(value: Any) -> bool:
    # JavaScript truthiness: empty lists and mappings are truthy.
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return False
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def _month_year(value: dt.date) -> str:
    return f"{MONTHS[value.month - 1]} {value.year}"


def _parse_loose_date(text: str) -> dt.datetime | None:
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Any = None) -> str:
    if not is_truthy(value) or value == PRESENT:
        return PRESENT
    text = str(value)
    stripped = text.strip()
    if YEAR_RE.match(stripped):
        return stripped
    match = YEAR_MONTH_RE.match(stripped)
    if match:
        month = int(match.group(2))
        if 1 <= month <= 12:
            return f"{MONTHS[month - 1]} {match.group(1)}"
    else:
        match = YEAR_MONTH_DAY_RE.match(stripped)
        if match:
            try:
                return _month_year(dt.date(int(match.group(1)), int(match.group(2)), int(match.group(3))))
            except ValueError:
                pass
    parsed = _parse_loose_date(stripped)
    if parsed is None:
        return text
    return _month_year(parsed)


def custom_color_styles(colors: Any) -> str:
    if not isinstance(colors, dict):
        return ""
    values = {name: colors.get(name) or default for name, default in DEFAULT_COLORS.items()}
    return "\n".join(
        [
            "<style>",
            "    :root {",
            f"        --primary-color: {html.escape(str(values['primary']))};",
            f"        --secondary-color: {html.escape(str(values['secondary']))};",
            f"        --accent-color: {html.escape(str(values['accent']))};",
            "    }",
            "</style>",
        ]
    )


def block_if(value: Any, scope: Any, fn: Callable, inverse: Callable) -> str:
    if is_truthy(value):
        return fn(scope)
    return inverse(scope)


def block_unless(value: Any, scope: Any, fn: Callable, inverse: Callable) -> str:
    return block_if(not is_truthy(value), scope, fn, inverse)


def block_each(value: Any, scope: Any, fn: Callable, inverse: Callable) -> str:
    if isinstance(value, dict):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = [(None, item) for item in value]
    else:
        items = []
    if not items:
        return inverse(scope)
    last = len(items) - 1
    parts = []
    for index, (key, item) in enumerate(items):
        data = {"index": index, "first": index == 0, "last": index == last}
        if key is not None:
            data["key"] = key
        parts.append(fn(scope.child(item, data)))
    return "".join(parts)


INLINE_HELPERS: dict[str, Callable[..., Any]] = {
    "formatDate": format_date,
}

BLOCK_HELPERS: dict[str, Callable[[Any, Any, Callable, Callable], str]] = {
    "if": block_if,
    "unless": block_unless,
    "each": block_each,
}
