"""Shared test fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def write_manifest(project_dir: Path) -> Callable[..., Path]:
    """Write a package.json into the project directory."""

    def _write(**fields: Any) -> Path:
        path = project_dir / "package.json"
        path.write_text(json.dumps(fields))
        return path

    return _write


@pytest.fixture
def make_bins(project_dir: Path) -> Callable[..., Path]:
    """Create executables in node_modules/.bin of the project."""

    def _make(*names: str, folder: str = "node_modules") -> Path:
        bin_dir = project_dir / folder / ".bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        for name in names:
            exe = bin_dir / name
            exe.write_text(f"#!/bin/sh\necho {name} \"$@\"\n")
            exe.chmod(0o755)
        return bin_dir

    return _make
