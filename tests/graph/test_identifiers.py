"""Tests for target label parsing."""

import pytest

from linkgroups.graph.identifiers import TargetLabel


def test_parse_full_label() -> None:
    """Cell, package and name are split on `//` and `:`."""
    target = TargetLabel.parse("fbsource//foo/bar:baz")

    assert target.cell == "fbsource"
    assert target.package == "foo/bar"
    assert target.name == "baz"
    assert target.configuration == ""
    assert str(target) == "fbsource//foo/bar:baz"


def test_parse_shorthand_uses_last_package_component() -> None:
    assert TargetLabel.parse("//foo/bar") == TargetLabel("", "foo/bar", "bar")


def test_configured_label_raw_target_drops_configuration() -> None:
    """raw_target strips the configuration suffix."""
    target = TargetLabel.parse("//app:main (platform-linux)")

    assert target.configuration == "platform-linux"
    assert str(target) == "//app:main (platform-linux)"
    assert str(target.raw_target()) == "//app:main"
    assert target.raw_target().raw_target() == target.raw_target()


@pytest.mark.parametrize("text", ["", "foo:bar", "//", "// :x"])
def test_parse_rejects_malformed_labels(text: str) -> None:
    with pytest.raises(ValueError):
        TargetLabel.parse(text)


def test_labels_are_ordered_and_hashable() -> None:
    a = TargetLabel.parse("//a:x")
    b = TargetLabel.parse("//b:x")

    assert sorted([b, a]) == [a, b]
    assert len({a, TargetLabel.parse("//a:x")}) == 1
