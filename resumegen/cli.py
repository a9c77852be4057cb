from __future__ import annotations

import argparse
import datetime as dt
import sys
import time
from pathlib import Path

from .config import DEFAULT_SETTINGS, load_resume, load_settings
from .errors import SiteBuildError
from .helpers import is_truthy
from .pages import build_robots, build_sitemap, canonical_url, write_cname
from .render import build_render_context, copy_directory, read_template, render_template, write_text
from .utils import directory_stats, format_bytes, parse_int
from .validate import check_profile_image, print_results, validate_config
from .watch import run_dev
from .wizard import run_wizard

ASSET_DIRS = ("css", "js", "images")


def build_site(args: argparse.Namespace) -> dict:
    data_path = Path(args.data)
    template_path = Path(args.template)
    src_dir = Path(args.src)
    output_dir = Path(args.output)
    now = dt.datetime.now().astimezone()
    warnings = []

    config = load_resume(data_path)
    template = read_template(template_path)

    image_warning = check_profile_image(config, src_dir, src_dir / "images")
    if image_warning:
        print(f"Warning: {image_warning}", file=sys.stderr)
        warnings.append(image_warning)

    html_doc = render_template(template, build_render_context(config, now))
    output_dir.mkdir(parents=True, exist_ok=True)
    write_text(output_dir / "index.html", html_doc)

    for name in ASSET_DIRS:
        if not copy_directory(src_dir / name, output_dir / name):
            warnings.append(f"Source directory not found: {src_dir / name}")

    site_url = canonical_url(config)
    build_sitemap(output_dir, site_url, now)
    build_robots(output_dir, site_url)
    settings = config.get("settings") or {}
    write_cname(output_dir, settings.get("customDomain"))

    return build_summary(config, output_dir, warnings)


def build_summary(config: dict, output_dir: Path, warnings: list[str] | None = None) -> dict:
    personal = config.get("personal") or {}
    settings = config.get("settings") or {}
    enabled = settings.get("sectionsEnabled") or {}
    skills = config.get("skills") or {}
    size, files = directory_stats(output_dir)
    return {
        "name": personal.get("fullName", ""),
        "title": personal.get("title", ""),
        "sections_enabled": sum(1 for value in enabled.values() if is_truthy(value)),
        "experience": len(config.get("experience") or []),
        "projects": len(config.get("projects") or []),
        "skill_categories": len(skills.get("categories") or []),
        "size": size,
        "files": files,
        "output": str(output_dir),
        "warnings": list(warnings or []),
    }


def print_summary(summary: dict) -> None:
    print("Build Summary:")
    print(f"  Name: {summary['name']}")
    print(f"  Title: {summary['title']}")
    print(f"  Sections enabled: {summary['sections_enabled']}")
    print(f"  Experience items: {summary['experience']}")
    print(f"  Projects: {summary['projects']}")
    print(f"  Skills categories: {summary['skill_categories']}")
    print(f"  Total size: {format_bytes(summary['size'])}")
    print(f"  Files: {summary['files']}")
    print(f"Site generated in: {summary['output']}")


def run_build(args: argparse.Namespace) -> int:
    start = time.perf_counter()
    try:
        summary = build_site(args)
    except (SiteBuildError, OSError) as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print_summary(summary)
    return 0


def run_validate(args: argparse.Namespace) -> int:
    try:
        config = load_resume(Path(args.data))
    except SiteBuildError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    result = validate_config(config)
    print_results(result)
    return 0 if result.ok else 1


def run_watch(args: argparse.Namespace) -> int:
    watch_paths = []
    for value in [*args.watch, Path(args.data).parent, Path(args.template).parent]:
        path = Path(value)
        if path not in watch_paths:
            watch_paths.append(path)

    def rebuild() -> None:
        print_summary(build_site(args))

    return run_dev(rebuild, watch_paths, Path(args.output), delay=args.debounce_ms / 1000)


def run_setup(args: argparse.Namespace) -> int:
    try:
        run_wizard(Path(args.data))
    except (KeyboardInterrupt, EOFError):
        print("\nSetup cancelled.", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to builder settings file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_settings(Path(pre_args.config))

    def cfg_value(key: str) -> object:
        value = config.get(key)
        return DEFAULT_SETTINGS[key] if value is None else value

    def cfg_str(key: str) -> str:
        return str(cfg_value(key))

    def cfg_list(key: str) -> list[str]:
        value = cfg_value(key)
        if isinstance(value, str):
            return [value]
        return [str(item) for item in value]

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=pre_args.config, help="Path to builder settings file (TOML/YAML/JSON).")
    common.add_argument("--data", default=cfg_str("data"), help="Path to the resume JSON data file.")
    common.add_argument("--template", default=cfg_str("template"), help="Path to the HTML template.")
    common.add_argument("--src", default=cfg_str("src"), help="Directory containing css/, js/ and images/.")
    common.add_argument("--output", default=cfg_str("output"), help="Output directory for the site.")

    parser = argparse.ArgumentParser(description="Single-page resume website generator.")
    commands = parser.add_subparsers(dest="command", required=True)
    build_parser = commands.add_parser("build", parents=[common], help="Build the site once.")
    build_parser.set_defaults(func=run_build)
    validate_parser = commands.add_parser("validate", parents=[common], help="Validate the resume data file.")
    validate_parser.set_defaults(func=run_validate)
    dev_parser = commands.add_parser("dev", parents=[common], help="Build, then rebuild on every change.")
    dev_parser.add_argument(
        "--debounce-ms",
        default=parse_int(cfg_value("debounce_ms"), DEFAULT_SETTINGS["debounce_ms"]),
        type=int,
        help="Delay after the last change before rebuilding.",
    )
    dev_parser.add_argument(
        "--watch",
        action="append",
        default=None,
        help="Directory to watch (repeatable).",
    )
    dev_parser.set_defaults(func=run_watch)
    setup_parser = commands.add_parser("setup", parents=[common], help="Create a new resume data file interactively.")
    setup_parser.set_defaults(func=run_setup)

    args = parser.parse_args(argv)
    if getattr(args, "watch", False) is None:
        args.watch = cfg_list("watch")
    return args.func(args)
