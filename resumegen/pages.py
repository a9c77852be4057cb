from __future__ import annotations

import datetime as dt
import html
from pathlib import Path

from .render import write_text
from .utils import iso_date, join_url

PLACEHOLDER_URL = "https://yourusername.github.io"
CNAME_FILE = "CNAME"


def canonical_url(config: dict) -> str:
    seo = (config.get("settings") or {}).get("seo") or {}
    return (seo.get("canonicalUrl") or "").strip() or PLACEHOLDER_URL


def build_sitemap(output_dir: Path, site_url: str, now: dt.datetime | None = None) -> Path:
    lastmod = iso_date(now or dt.datetime.now(dt.timezone.utc))
    sitemap = "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
            "  <url>",
            f"    <loc>{html.escape(site_url)}</loc>",
            f"    <lastmod>{lastmod}</lastmod>",
            "    <changefreq>monthly</changefreq>",
            "    <priority>1.0</priority>",
            "  </url>",
            "</urlset>",
        ]
    )
    path = output_dir / "sitemap.xml"
    write_text(path, sitemap)
    return path


def build_robots(output_dir: Path, site_url: str) -> Path:
    robots = "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            "",
            f"Sitemap: {join_url(site_url, 'sitemap.xml')}",
        ]
    )
    path = output_dir / "robots.txt"
    write_text(path, robots)
    return path


def write_cname(output_dir: Path, custom_domain: object) -> Path | None:
    path = output_dir / CNAME_FILE
    domain = custom_domain.strip() if isinstance(custom_domain, str) else ""
    if domain:
        write_text(path, domain)
        return path
    path.unlink(missing_ok=True)
    return None
