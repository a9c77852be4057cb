from __future__ import annotations

import datetime as dt
import math
from pathlib import Path


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def iso_date(value: dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    value = value.astimezone(dt.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def directory_stats(root: Path) -> tuple[int, int]:
    if not root.exists():
        return 0, 0
    size = 0
    files = 0
    for path in root.rglob("*"):
        if path.is_file():
            size += path.stat().st_size
            files += 1
    return size, files


def format_bytes(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    exponent = min(int(math.floor(math.log(size, 1024))), len(units) - 1)
    value = round(size / (1024**exponent), 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {units[exponent]}"
