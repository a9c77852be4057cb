import argparse
import json
import shutil
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SAMPLE_CONFIG = ROOT / "config" / "resume-data.json"


def write_config(args: argparse.Namespace, config: dict) -> None:
    path = Path(args.data)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")


@pytest.fixture
def sample_config():
    """The sample resume shipped with the project (well-formed, no warnings)."""
    return json.loads(SAMPLE_CONFIG.read_text(encoding="utf-8"))


@pytest.fixture
def project(tmp_path, sample_config):
    """A throwaway project tree with the sample data, template and assets."""
    shutil.copytree(ROOT / "src", tmp_path / "src")
    args = argparse.Namespace(
        config=str(tmp_path / "site.toml"),
        data=str(tmp_path / "config" / "resume-data.json"),
        template=str(tmp_path / "src" / "index.html"),
        src=str(tmp_path / "src"),
        output=str(tmp_path / "dist"),
    )
    write_config(args, sample_config)
    return args
