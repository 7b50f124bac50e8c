"""Listing and command question for runs without an action."""

from collections.abc import Callable, Mapping, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter

from pkgrun.config import DEFAULT_MANIFEST
from pkgrun.output import Reporter

COMMAND_QUESTION = "Which command would you like to run?: "

AskFn = Callable[[str, Sequence[str]], str]


def ask_with_completion(question: str, completions: Sequence[str]) -> str:
    """Read one line from the terminal, completing known command names."""
    session: PromptSession[str] = PromptSession(
        completer=WordCompleter(list(completions)),
    )
    return session.prompt(question)


class InteractivePrompt:
    """Shows what can be run and optionally asks which command to run."""

    def __init__(
        self,
        reporter: Reporter,
        ask: AskFn = ask_with_completion,
        manifest_file: str = DEFAULT_MANIFEST,
    ) -> None:
        self._reporter = reporter
        self._ask = ask
        self._manifest_file = manifest_file

    def present(
        self,
        binary_names: Sequence[str],
        manifest_names: Sequence[str],
        hints: Mapping[str, str],
        non_interactive: bool = False,
        completions: Sequence[str] = (),
    ) -> list[str] | None:
        """List binaries and scripts, then ask for a command line.

        Returns the answer split into ``[action, *args]``, or None when there
        is nothing to run or the question was declined.
        """
        if binary_names:
            self._reporter.info(f"Commands available from binary scripts: {', '.join(binary_names)}")
        else:
            self._reporter.error("There are no binary scripts available.")

        if not manifest_names:
            self._reporter.error(f"There are no scripts specified inside {self._manifest_file}.")
            return None

        self._reporter.info("Project commands")
        self._reporter.list(manifest_names, hints)
        if non_interactive:
            return None

        try:
            answer = self._ask(COMMAND_QUESTION, completions or manifest_names)
        except (EOFError, KeyboardInterrupt):
            answer = ""

        argv = answer.split()
        if not argv:
            self._reporter.error("No command specified.")
            return None
        return argv
