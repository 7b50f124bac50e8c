"""Discovery of executables in registry bin directories."""

import logging
import shlex
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def list_dir(path: Path) -> list[str]:
    """Return the entry names of a directory, sorted."""
    return sorted(entry.name for entry in path.iterdir())


@dataclass
class BinaryIndex:
    """Executables found in bin directories.

    ``commands`` maps each name to its shell-quoted absolute path. ``names``
    keeps every discovered name in discovery order, for display.
    """

    commands: dict[str, str] = field(default_factory=dict)
    names: list[str] = field(default_factory=list)
    visited: list[Path] = field(default_factory=list)


def build_binary_index(
    bin_dirs: Iterable[Path],
    list_entries: Callable[[Path], list[str]] = list_dir,
) -> BinaryIndex:
    """Scan ``bin_dirs`` in order and index their entries.

    Directories are compared by resolved path, so registries sharing one
    physical folder are listed once. Missing directories are skipped.
    """
    index = BinaryIndex()
    seen: set[Path] = set()

    for bin_dir in bin_dirs:
        resolved = bin_dir.resolve()
        if resolved in seen:
            logger.debug("Skipping already scanned bin folder %s", bin_dir)
            continue
        seen.add(resolved)

        if not bin_dir.is_dir():
            logger.debug("No bin folder at %s", bin_dir)
            continue

        index.visited.append(resolved)
        absolute = bin_dir.absolute()
        entries = list_entries(bin_dir)
        for name in entries:
            index.names.append(name)
            index.commands[name] = shlex.quote(str(absolute / name))
        logger.debug("Indexed %d binaries from %s", len(entries), bin_dir)

    return index
