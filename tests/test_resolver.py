"""Tests for action resolution."""

import pytest

from pkgrun.exceptions import CommandNotFoundError
from pkgrun.resolver import CommandStage, levenshtein, resolve, suggest
from pkgrun.scripts import build_script_table


class TestLevenshtein:
    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("", "", 0),
            ("build", "build", 0),
            ("build", "buidl", 2),
            ("build", "buil", 1),
            ("build", "bulid", 2),
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("test", "tests", 1),
        ],
    )
    def test_distance(self, a: str, b: str, expected: int) -> None:
        assert levenshtein(a, b) == expected
        assert levenshtein(b, a) == expected


class TestResolve:
    def test_script_with_pre_and_post(self) -> None:
        table = build_script_table(
            {}, {"pretest": "lint", "test": "jest", "posttest": "report"}
        )
        assert resolve("test", table) == [
            CommandStage("pretest", "lint"),
            CommandStage("test", "jest"),
            CommandStage("posttest", "report"),
        ]

    def test_script_with_only_pre(self) -> None:
        table = build_script_table({}, {"prebuild": "clean", "build": "tsc"})
        assert [s.stage for s in resolve("build", table)] == ["prebuild", "build"]

    def test_script_with_only_post(self) -> None:
        table = build_script_table({}, {"build": "tsc", "postbuild": "copy"})
        assert [s.stage for s in resolve("build", table)] == ["build", "postbuild"]

    def test_script_without_hooks(self) -> None:
        table = build_script_table({}, {"build": "tsc"})
        assert resolve("build", table) == [CommandStage("build", "tsc")]

    def test_binary_only_action_runs_alone(self) -> None:
        table = build_script_table({"tsc": "/bin/tsc"}, {"pretsc": "echo never"})
        assert resolve("tsc", table) == [CommandStage("tsc", "/bin/tsc")]

    def test_binary_hooks_are_not_expanded_for_binaries(self) -> None:
        table = build_script_table(
            {"pretsc": "/bin/pretsc", "tsc": "/bin/tsc"}, {"other": "x"}
        )
        assert [s.stage for s in resolve("tsc", table)] == ["tsc"]

    def test_hook_must_be_manifest_script(self) -> None:
        table = build_script_table({"prebuild": "/bin/prebuild"}, {"build": "tsc"})
        assert [s.stage for s in resolve("build", table)] == ["build"]

    def test_manifest_script_shadows_binary(self) -> None:
        table = build_script_table({"build": "/bin/build"}, {"build": "make"})
        assert resolve("build", table) == [CommandStage("build", "make")]

    def test_user_defined_env_script_resolves(self) -> None:
        table = build_script_table({}, {"env": "printenv"})
        assert resolve("env", table) == [CommandStage("env", "printenv")]


class TestResolutionFailure:
    def test_suggests_near_miss(self) -> None:
        table = build_script_table({}, {"build": "tsc", "test": "jest"})
        with pytest.raises(CommandNotFoundError) as exc_info:
            resolve("buil", table)
        assert exc_info.value.suggestion == "build"
        assert 'Did you mean "build"?' in str(exc_info.value)

    def test_transposition_counts_as_two_edits(self) -> None:
        table = build_script_table({}, {"build": "tsc"})
        with pytest.raises(CommandNotFoundError) as exc_info:
            resolve("buidl", table)
        assert exc_info.value.suggestion is None

    def test_no_suggestion_when_nothing_close(self) -> None:
        table = build_script_table({"tsc": "/bin/tsc"}, {"build": "tsc"})
        with pytest.raises(CommandNotFoundError) as exc_info:
            resolve("deploy", table)
        assert exc_info.value.suggestion is None
        assert str(exc_info.value) == 'Command "deploy" not found.'

    def test_empty_table_fails_without_suggestion(self) -> None:
        with pytest.raises(CommandNotFoundError) as exc_info:
            resolve("env", build_script_table({}, None))
        assert exc_info.value.action == "env"

    def test_last_qualifying_name_wins(self) -> None:
        table = build_script_table({"cat": "/bin/cat"}, {"bat": "x", "hat": "y"})
        assert table.list_names() == ["cat", "bat", "hat"]
        with pytest.raises(CommandNotFoundError) as exc_info:
            resolve("at", table)
        assert exc_info.value.suggestion == "hat"

    def test_suggest_prefers_later_match_over_exact_one(self) -> None:
        table = build_script_table({}, {"lint": "eslint", "lints": "eslint ."})
        assert suggest("lint", table) == "lints"
