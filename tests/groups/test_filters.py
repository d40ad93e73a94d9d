"""Tests for filter parsing and evaluation."""

import pytest

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.groups.errors import InvalidFilterSyntax, UnknownFilterKind
from linkgroups.groups.filters import matches_filters, parse_filter, parse_filters
from linkgroups.groups.types import BuildTargetFilter, LabelFilter, TargetRegexFilter

TARGET = TargetLabel.parse("//libs/core:core (linux)")


def test_parse_filter_prefixes() -> None:
    assert isinstance(parse_filter("label:foo"), LabelFilter)
    assert isinstance(parse_filter("tag:foo"), LabelFilter)
    assert isinstance(parse_filter("target_regex://libs/.*"), TargetRegexFilter)
    assert isinstance(parse_filter("pattern://libs/..."), BuildTargetFilter)


def test_parse_filter_rejects_unknown_prefix() -> None:
    with pytest.raises(InvalidFilterSyntax):
        parse_filter("labels:foo")


def test_parse_filter_rejects_invalid_regex() -> None:
    with pytest.raises(InvalidFilterSyntax):
        parse_filter("label:(unclosed")


def test_parse_filters_accepts_string_list_or_none() -> None:
    assert parse_filters(None) == []
    assert len(parse_filters("label:a")) == 1
    assert len(parse_filters(["label:a", "pattern://x:"])) == 2


def test_label_regex_is_anchored() -> None:
    flt = parse_filter("label:core")

    assert matches_filters([flt], TARGET, {"core"})
    assert not matches_filters([flt], TARGET, {"core_extra"})
    assert not matches_filters([flt], TARGET, {"not_core"})


def test_label_filter_matches_any_label() -> None:
    flt = parse_filter("label:lib_.*")

    assert matches_filters([flt], TARGET, {"unrelated", "lib_core"})
    assert not matches_filters([flt], TARGET, set())
    assert not matches_filters([flt], TARGET, None)


def test_successive_filters_are_combined_with_and() -> None:
    filters = parse_filters(["label:a", "label:b", "pattern://libs/..."])

    assert matches_filters(filters, TARGET, {"a", "b"})
    assert not matches_filters(filters, TARGET, {"a"})
    assert not matches_filters(filters, TargetLabel.parse("//app:x"), {"a", "b"})


def test_target_regex_matches_unconfigured_target() -> None:
    assert matches_filters(parse_filters("target_regex://libs/core:core"), TARGET, ())
    assert not matches_filters(parse_filters("target_regex://libs/core"), TARGET, ())


def test_target_regex_short_circuits_later_filters() -> None:
    """Known quirk: the first target_regex filter decides on its own."""
    regex_then_label = parse_filters(["target_regex://libs/.*", "label:never"])
    regex_alone = parse_filters(["target_regex://libs/.*"])

    assert matches_filters(regex_then_label, TARGET, set()) is True
    assert matches_filters(regex_then_label, TARGET, set()) == matches_filters(
        regex_alone, TARGET, set()
    )

    # A label filter that passes before the regex leaves the regex in charge.
    label_then_regex = parse_filters(["label:core", "target_regex://libs/.*", "label:never"])
    assert matches_filters(label_then_regex, TARGET, {"core"}) is True


def test_failing_filter_before_target_regex_still_rejects() -> None:
    filters = parse_filters(["label:missing", "target_regex://libs/.*"])

    assert matches_filters(filters, TARGET, {"core"}) is False


def test_unknown_filter_object_raises() -> None:
    with pytest.raises(UnknownFilterKind):
        matches_filters([object()], TARGET, ())
