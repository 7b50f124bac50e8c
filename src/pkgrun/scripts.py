"""Script table: binaries overlaid with manifest scripts."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class ScriptTable:
    """Runnable commands with manifest-script listing data.

    ``commands`` is the merged name -> command mapping. ``manifest_names`` is
    the sorted list of manifest scripts and ``hints`` their definitions, both
    for display only.
    """

    commands: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    manifest_scripts: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    manifest_names: tuple[str, ...] = ()
    hints: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def is_manifest_script(self, name: str) -> bool:
        """Whether ``name`` is declared in the manifest (governs pre/post hooks)."""
        return name in self.manifest_scripts

    def is_runnable(self, name: str) -> bool:
        """Whether ``name`` resolves to any command, binary or script."""
        return name in self.commands

    def get(self, name: str) -> str:
        return self.commands[name]

    def list_names(self) -> list[str]:
        """Return all runnable names in table order."""
        return list(self.commands)


def build_script_table(
    binaries: Mapping[str, str],
    manifest_scripts: Mapping[str, str] | None,
) -> ScriptTable:
    """Merge binaries with manifest scripts; the manifest wins on collision."""
    merged = dict(binaries)
    if not manifest_scripts:
        return ScriptTable(commands=MappingProxyType(merged))

    names = tuple(sorted(manifest_scripts))
    hints = {name: manifest_scripts[name] for name in names}
    merged.update(manifest_scripts)

    return ScriptTable(
        commands=MappingProxyType(merged),
        manifest_scripts=MappingProxyType(dict(manifest_scripts)),
        manifest_names=names,
        hints=MappingProxyType(hints),
    )
