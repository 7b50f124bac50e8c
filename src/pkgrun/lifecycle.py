"""Sequential execution of resolved lifecycle stages."""

import dataclasses
import logging
import shlex
from collections.abc import Sequence

from pkgrun.exceptions import ExecutionError
from pkgrun.executor import ExecutionContext, Executor
from pkgrun.output import ExecutionResult
from pkgrun.resolver import CommandStage

logger = logging.getLogger(__name__)


def with_args(command: str, args: Sequence[str]) -> str:
    """Append shell-quoted ``args`` to ``command``."""
    if not args:
        return command
    return f"{command} {' '.join(shlex.quote(arg) for arg in args)}"


def run_stages(
    action: str,
    stages: Sequence[CommandStage],
    args: Sequence[str],
    context: ExecutionContext,
    executor: Executor,
) -> list[ExecutionResult]:
    """Run ``stages`` in order, stopping at the first failure.

    Trailing ``args`` go to the ``action`` stage only; pre and post hooks run
    exactly as declared.

    Raises:
        ExecutionError: a stage exited non-zero. Later stages are not run.
    """
    stage_context = dataclasses.replace(context, wrap_output=False)
    results: list[ExecutionResult] = []

    for stage, command in stages:
        cmd = with_args(command, args) if stage == action else command
        result = executor.run(stage, cmd, stage_context)
        results.append(result)
        if not result.succeeded:
            logger.debug("Stage %s failed with %d", stage, result.returncode)
            raise ExecutionError(
                f"Command failed with exit code {result.returncode}.",
                stage=stage,
                returncode=result.returncode,
            )

    return results
