"""Parsing and evaluation of group mapping filters."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence, Union

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.groups.errors import InvalidFilterSyntax, UnknownFilterKind
from linkgroups.groups.pattern import parse_build_target_pattern
from linkgroups.groups.types import (
    BuildTargetFilter,
    Filter,
    LabelFilter,
    TargetRegexFilter,
)

logger = logging.getLogger("linkgroups.groups.filters")

_LABEL_PREFIXES = ("label:", "tag:")
_TARGET_REGEX_PREFIX = "target_regex:"
_PATTERN_PREFIX = "pattern:"


def _compile_anchored(fragment: str, entry: str) -> "re.Pattern[str]":
    # Caller-supplied fragments must match the whole text.
    try:
        return re.compile(f"^{fragment}$")
    except re.error as exc:
        raise InvalidFilterSyntax(f"Invalid regex in filter {entry!r}: {exc}") from exc


def parse_filter(entry: str) -> Filter:
    """Parse a single filter string.

    Recognized forms are `label:<regex>`, `tag:<regex>`,
    `target_regex:<regex>` and `pattern:<build target pattern>`.

    Raises:
        InvalidFilterSyntax: If the entry has no recognized prefix.
    """
    for prefix in _LABEL_PREFIXES:
        if entry.startswith(prefix):
            return LabelFilter(regex=_compile_anchored(entry[len(prefix):], entry))

    if entry.startswith(_TARGET_REGEX_PREFIX):
        return TargetRegexFilter(
            regex=_compile_anchored(entry[len(_TARGET_REGEX_PREFIX):], entry)
        )

    if entry.startswith(_PATTERN_PREFIX):
        return BuildTargetFilter(
            pattern=parse_build_target_pattern(entry[len(_PATTERN_PREFIX):])
        )

    raise InvalidFilterSyntax(
        f"Invalid group mapping filter: {entry}\n"
        "Filter must begin with `label:`, `tag:`, `target_regex:` or `pattern:`."
    )


def parse_filters(entry: Union[Sequence[str], str, None]) -> List[Filter]:
    """Parse the filter field of a mapping: a list, a single string, or None."""
    if entry is None:
        return []
    if isinstance(entry, str):
        return [parse_filter(entry)]
    return [parse_filter(e) for e in entry]


def _any_label_matches(regex: "re.Pattern[str]", labels: Iterable[str]) -> bool:
    for label in labels:
        if regex.match(label):
            return True
    return False


def matches_filters(
    filters: Sequence[Filter],
    target: TargetLabel,
    labels: Optional[Iterable[str]],
) -> bool:
    """Return whether a node passes every filter.

    Filters are evaluated in order and combined with AND, except that the
    first `TargetRegexFilter` reached decides the result on its own and
    any filters after it are not consulted.
    """
    labels = labels or ()
    for flt in filters:
        if isinstance(flt, LabelFilter):
            if not _any_label_matches(flt.regex, labels):
                return False
        elif isinstance(flt, TargetRegexFilter):
            # NOTE: returns early instead of continuing the AND chain.
            return flt.regex.match(str(target.raw_target())) is not None
        elif isinstance(flt, BuildTargetFilter):
            if not flt.pattern.matches(target):
                return False
        else:
            raise UnknownFilterKind(f"Unknown filter type: {flt!r}")
    return True


__all__ = ["matches_filters", "parse_filter", "parse_filters"]
