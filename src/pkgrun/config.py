"""Settings and manifest loading."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pkgrun.exceptions import ConfigError, ManifestError

logger = logging.getLogger(__name__)

PKGRUN_HOME = Path("~/.pkgrun")
LOCAL_SETTINGS = Path(".pkgrun.yaml")
DEFAULT_MANIFEST = "package.json"
BIN_FOLDER = ".bin"


def _default_registries() -> dict[str, str]:
    return {"npm": "node_modules", "yarn": "node_modules"}


@dataclass
class Settings:
    """Run settings from settings.yaml."""

    script_shell: str | None = None
    non_interactive: bool = False
    manifest: str = DEFAULT_MANIFEST
    registries: dict[str, str] = field(default_factory=_default_registries)

    def bin_folders(self, cwd: Path) -> list[Path]:
        """Bin directories for every registry, in registry order."""
        return [cwd / folder / BIN_FOLDER for folder in self.registries.values()]


@dataclass
class Manifest:
    """The parts of a project manifest that script resolution reads."""

    scripts: dict[str, str] | None = None
    raw: dict[str, Any] = field(default_factory=dict)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file."""
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def load_settings(path: Path) -> Settings:
    """Load and validate settings.yaml."""
    data = _load_yaml(path)
    run = data.get("run", {}) or {}
    registries = data.get("registries")

    if registries is None:
        registries = _default_registries()
    elif not isinstance(registries, dict) or not all(
        isinstance(folder, str) for folder in registries.values()
    ):
        raise ConfigError(f"'registries' in {path} must map registry names to folders")

    script_shell = run.get("script_shell")
    return Settings(
        script_shell=str(script_shell) if script_shell else None,
        non_interactive=bool(run.get("non_interactive", False)),
        manifest=run.get("manifest", DEFAULT_MANIFEST),
        registries=dict(registries),
    )


def find_settings(explicit: Path | None = None) -> Settings:
    """Load settings from an explicit file, ~/.pkgrun or ./.pkgrun.yaml."""
    if explicit is not None:
        return load_settings(explicit)

    for path in (PKGRUN_HOME.expanduser() / "settings.yaml", LOCAL_SETTINGS):
        if path.exists():
            logger.debug("Loading settings from %s", path)
            return load_settings(path)

    return Settings()


def read_manifest(cwd: Path, filename: str = DEFAULT_MANIFEST) -> Manifest:
    """Read the project manifest in ``cwd``.

    A missing manifest reads as an empty one. A ``scripts`` value that is not
    a mapping is treated as absent, and scripts whose body is not a string
    are dropped.
    """
    path = cwd / filename
    if not path.exists():
        logger.debug("No manifest at %s", path)
        return Manifest()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Expected an object in {path}, got {type(data).__name__}")

    raw_scripts = data.get("scripts")
    scripts: dict[str, str] | None = None
    if isinstance(raw_scripts, dict):
        scripts = {}
        for name, body in raw_scripts.items():
            if isinstance(body, str):
                scripts[name] = body
            else:
                logger.debug("Ignoring script %r with non-string body %r", name, body)

    return Manifest(scripts=scripts, raw=data)
