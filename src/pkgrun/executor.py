"""Shell execution of lifecycle stages."""

import logging
import os
import subprocess
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pkgrun.config import Manifest
from pkgrun.exceptions import ExecutionError
from pkgrun.output import ExecutionResult

logger = logging.getLogger(__name__)

WRAP_OUTPUT_VAR = "PKGRUN_WRAP_OUTPUT"
DEFAULT_SHELL = "/bin/sh"


@dataclass(frozen=True)
class ExecutionContext:
    """Everything a stage needs besides its command string.

    ``wrap_output`` is False for contexts handed to stages, so nested pkgrun
    invocations do not wrap their output a second time.
    """

    cwd: Path
    manifest: Manifest = field(default_factory=Manifest)
    bin_dirs: tuple[Path, ...] = ()
    shell: str | None = None
    wrap_output: bool = True
    env: dict[str, str] = field(default_factory=dict)


def _env_key(name: str) -> str:
    return "".join(c if c.isalnum() else "_" for c in name)


def _env_value(value: object) -> str | None:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _prepend_path(current: str, dirs: Iterable[Path]) -> str:
    entries: list[str] = []
    for entry in [str(d) for d in dirs] + current.split(os.pathsep):
        if entry and entry not in entries:
            entries.append(entry)
    return os.pathsep.join(entries)


def make_env(stage: str, context: ExecutionContext, command: str | None = None) -> dict[str, str]:
    """Build the environment a stage runs with."""
    env = os.environ.copy()
    env["npm_lifecycle_event"] = stage
    if command is not None:
        env["npm_lifecycle_script"] = command

    for key, value in context.manifest.raw.items():
        scalar = _env_value(value)
        if scalar is not None:
            env[f"npm_package_{_env_key(key)}"] = scalar
    for name, script in (context.manifest.scripts or {}).items():
        scalar = _env_value(script)
        if scalar is not None:
            env[f"npm_package_scripts_{_env_key(name)}"] = scalar

    bin_dirs = [d for d in context.bin_dirs if d.is_dir()]
    env["PATH"] = _prepend_path(env.get("PATH", ""), bin_dirs)

    if not context.wrap_output:
        env[WRAP_OUTPUT_VAR] = "false"

    env.update(context.env)
    return env


def shell_args(command: str, shell: str | None = None) -> list[str]:
    """Argument vector running ``command`` through ``shell``."""
    if shell:
        return [shell, "-c", command]
    if os.name == "nt":
        return [os.environ.get("ComSpec", "cmd.exe"), "/d", "/s", "/c", command]
    return [DEFAULT_SHELL, "-c", command]


class Executor:
    """Runs stage commands in the project directory, sharing the terminal."""

    def run(self, stage: str, command: str, context: ExecutionContext) -> ExecutionResult:
        """Execute ``command`` for ``stage`` and return the result.

        Raises:
            ExecutionError: the shell could not be started.
        """
        env = make_env(stage, context, command)
        args = shell_args(command, context.shell)
        logger.debug("Running %s in %s: %s", stage, context.cwd, command)

        start = time.monotonic()
        try:
            returncode = subprocess.run(args, cwd=context.cwd, env=env).returncode
        except OSError as e:
            raise ExecutionError(
                f"Could not run {stage}: {e}", stage=stage, returncode=127
            ) from e
        finally:
            duration = time.monotonic() - start

        return ExecutionResult(
            stage=stage,
            command=command,
            returncode=returncode,
            duration=duration,
        )
