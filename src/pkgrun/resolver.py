"""Action resolution into ordered lifecycle stages."""

import logging
from typing import NamedTuple

from pkgrun.exceptions import CommandNotFoundError
from pkgrun.scripts import ScriptTable

logger = logging.getLogger(__name__)

SUGGESTION_DISTANCE = 2


class CommandStage(NamedTuple):
    """One unit of a resolved plan: a hook or the main action."""

    stage: str
    command: str


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance between two strings."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def suggest(action: str, table: ScriptTable) -> str | None:
    """Return a near-miss name for ``action``, if any.

    Every name within distance 1 qualifies and the last one in table order
    is returned, not the closest.
    """
    suggestion = None
    for name in table.list_names():
        if levenshtein(name, action) < SUGGESTION_DISTANCE:
            suggestion = name
    return suggestion


def resolve(action: str, table: ScriptTable) -> list[CommandStage]:
    """Resolve ``action`` into its ordered stages.

    Manifest scripts expand to ``pre<action>``, ``<action>``, ``post<action>``
    with absent hooks omitted. A name that only a binary provides runs alone.

    Raises:
        CommandNotFoundError: nothing in the table matches ``action``.
    """
    stages: list[CommandStage] = []

    if table.is_manifest_script(action):
        pre = f"pre{action}"
        if table.is_manifest_script(pre):
            stages.append(CommandStage(pre, table.manifest_scripts[pre]))

        stages.append(CommandStage(action, table.get(action)))

        post = f"post{action}"
        if table.is_manifest_script(post):
            stages.append(CommandStage(post, table.manifest_scripts[post]))
    elif table.is_runnable(action):
        stages.append(CommandStage(action, table.get(action)))
    else:
        raise CommandNotFoundError(action, suggestion=suggest(action, table))

    logger.debug("Resolved %r to stages %s", action, [s.stage for s in stages])
    return stages
