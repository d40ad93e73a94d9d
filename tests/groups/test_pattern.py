"""Tests for structural build target patterns."""

import pytest

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.groups.errors import InvalidFilterSyntax
from linkgroups.groups.pattern import BuildTargetPatternKind, parse_build_target_pattern


def _t(text: str) -> TargetLabel:
    return TargetLabel.parse(text)


def test_single_target_pattern() -> None:
    pattern = parse_build_target_pattern("//foo/bar:baz")

    assert pattern.kind == BuildTargetPatternKind.SINGLE
    assert pattern.cell is None
    assert pattern.path == "foo/bar"
    assert pattern.name == "baz"
    assert pattern.matches(_t("//foo/bar:baz"))
    assert pattern.matches(_t("other//foo/bar:baz"))
    assert not pattern.matches(_t("//foo/bar:qux"))


def test_package_pattern_matches_only_that_package() -> None:
    pattern = parse_build_target_pattern("//foo:")

    assert pattern.kind == BuildTargetPatternKind.PACKAGE
    assert pattern.matches(_t("//foo:anything"))
    assert not pattern.matches(_t("//foo/sub:anything"))


def test_recursive_pattern_matches_subpackages() -> None:
    pattern = parse_build_target_pattern("cell//foo/...")

    assert pattern.kind == BuildTargetPatternKind.RECURSIVE
    assert pattern.cell == "cell"
    assert pattern.path == "foo"
    assert pattern.matches(_t("cell//foo:x"))
    assert pattern.matches(_t("cell//foo/bar/baz:x"))
    assert not pattern.matches(_t("cell//foobar:x"))
    assert not pattern.matches(_t("other//foo:x"))


def test_root_recursive_pattern_matches_everything() -> None:
    pattern = parse_build_target_pattern("//...")

    assert pattern.path == ""
    assert pattern.matches(_t("//a:b"))
    assert pattern.matches(_t("x//deep/er:b"))


def test_shorthand_pattern_names_last_component() -> None:
    pattern = parse_build_target_pattern("//foo/bar")

    assert pattern.kind == BuildTargetPatternKind.SINGLE
    assert pattern.name == "bar"


def test_to_json_describes_pattern() -> None:
    assert parse_build_target_pattern("c//p:n").to_json() == {
        "cell": "c",
        "kind": "single",
        "name": "n",
        "path": "p",
    }


@pytest.mark.parametrize("text", ["foo:bar", "//foo...", "//foo/.../bar", "//", "//a:b:c"])
def test_malformed_patterns_are_rejected(text: str) -> None:
    with pytest.raises(InvalidFilterSyntax):
        parse_build_target_pattern(text)
