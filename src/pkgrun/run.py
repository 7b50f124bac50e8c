"""The run command: build the script table, resolve, execute."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pkgrun.binaries import BinaryIndex, build_binary_index
from pkgrun.config import Manifest, Settings, read_manifest
from pkgrun.exceptions import CommandNotFoundError
from pkgrun.executor import ExecutionContext, Executor, make_env
from pkgrun.lifecycle import run_stages
from pkgrun.output import ExecutionResult, Reporter
from pkgrun.prompt import InteractivePrompt
from pkgrun.resolver import resolve
from pkgrun.scripts import ScriptTable, build_script_table

logger = logging.getLogger(__name__)

ENV_ACTION = "env"


class ScriptRunner:
    """Runs one invocation of the ``run`` command in a project directory."""

    def __init__(
        self,
        settings: Settings,
        cwd: Path,
        reporter: Reporter | None = None,
        executor: Executor | None = None,
        prompt: InteractivePrompt | None = None,
    ) -> None:
        self._settings = settings
        self._cwd = cwd
        self._reporter = reporter or Reporter()
        self._executor = executor or Executor()
        self._prompt = prompt or InteractivePrompt(self._reporter, manifest_file=settings.manifest)
        self._bin_dirs = settings.bin_folders(cwd)
        self.manifest = Manifest()
        self.binaries = BinaryIndex()
        self.table = ScriptTable()

    def load(self) -> ScriptTable:
        """Read the manifest and bin folders and build the script table."""
        self.manifest = read_manifest(self._cwd, self._settings.manifest)
        self.binaries = build_binary_index(self._bin_dirs)
        self.table = build_script_table(self.binaries.commands, self.manifest.scripts)
        logger.debug(
            "Script table has %d commands (%d from the manifest)",
            len(self.table.commands),
            len(self.table.manifest_names),
        )
        return self.table

    def context(self) -> ExecutionContext:
        return ExecutionContext(
            cwd=self._cwd,
            manifest=self.manifest,
            bin_dirs=tuple(self._bin_dirs),
            shell=self._settings.script_shell,
        )

    def run_command(self, argv: Sequence[str]) -> list[ExecutionResult]:
        """Resolve ``argv[0]`` and run its stages with ``argv[1:]``."""
        action, args = argv[0], list(argv[1:])
        try:
            stages = resolve(action, self.table)
        except CommandNotFoundError:
            if action != ENV_ACTION:
                raise
            self.print_env()
            return []
        return run_stages(action, stages, args, self.context(), self._executor)

    def print_env(self) -> None:
        env = make_env(ENV_ACTION, self.context())
        self._reporter.log(json.dumps(env, indent=2))

    def run(self, argv: Sequence[str], non_interactive: bool | None = None) -> list[ExecutionResult]:
        """Entry point of the run command.

        With no ``argv`` the available commands are listed and, unless
        non-interactive, the user is asked for one.
        """
        if non_interactive is None:
            non_interactive = self._settings.non_interactive
        self.load()

        if argv:
            return self.run_command(argv)

        answer = self._prompt.present(
            self.binaries.names,
            self.table.manifest_names,
            self.table.hints,
            non_interactive=non_interactive,
            completions=self.table.list_names(),
        )
        if answer is None:
            return []
        return self.run_command(answer)
