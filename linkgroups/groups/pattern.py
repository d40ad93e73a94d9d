"""Structural build target patterns.

Supported forms:

* `cell//path:name` - a single target
* `cell//path:` - every target in one package
* `cell//path/...` - every target in a package and its subpackages

The cell prefix is optional; a pattern without one matches any cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.groups.errors import InvalidFilterSyntax

_RECURSIVE_SUFFIX = "..."


class BuildTargetPatternKind(str, Enum):
    """How much of the target space a pattern covers."""

    SINGLE = "single"
    PACKAGE = "package"
    RECURSIVE = "recursive"


@dataclass(frozen=True)
class BuildTargetPattern:
    """Parsed build target pattern.

    Attributes:
        kind: Pattern kind.
        cell: Cell name, or None to match any cell.
        path: Package path without leading or trailing slashes.
        name: Target name for single-target patterns, else None.
    """

    kind: BuildTargetPatternKind
    cell: Optional[str]
    path: str
    name: Optional[str] = None

    def matches(self, target: TargetLabel) -> bool:
        """Return whether the target falls inside this pattern."""
        if self.cell is not None and self.cell != target.cell:
            return False

        if self.kind == BuildTargetPatternKind.SINGLE:
            return target.package == self.path and target.name == self.name
        if self.kind == BuildTargetPatternKind.PACKAGE:
            return target.package == self.path

        # Recursive
        if not self.path:
            return True
        return target.package == self.path or target.package.startswith(self.path + "/")

    def to_json(self) -> Dict[str, Any]:
        """Serializable description used by diagnostics."""
        return {
            "cell": self.cell,
            "kind": self.kind.value,
            "name": self.name,
            "path": self.path,
        }

    def __str__(self) -> str:
        prefix = f"{self.cell or ''}//"
        if self.kind == BuildTargetPatternKind.RECURSIVE:
            return f"{prefix}{self.path}/..." if self.path else f"{prefix}..."
        if self.kind == BuildTargetPatternKind.PACKAGE:
            return f"{prefix}{self.path}:"
        return f"{prefix}{self.path}:{self.name}"


def parse_build_target_pattern(pattern: str) -> BuildTargetPattern:
    """Parse a build target pattern string.

    Raises:
        InvalidFilterSyntax: If the pattern is malformed.
    """
    cell, sep, rest = pattern.strip().partition("//")
    if not sep:
        raise InvalidFilterSyntax(f"Invalid build target pattern (missing '//'): {pattern!r}")
    if "/" in cell or ":" in cell:
        raise InvalidFilterSyntax(f"Invalid cell in build target pattern: {pattern!r}")

    if rest.endswith(_RECURSIVE_SUFFIX):
        path = rest[: -len(_RECURSIVE_SUFFIX)]
        if path and not path.endswith("/"):
            raise InvalidFilterSyntax(f"Invalid recursive build target pattern: {pattern!r}")
        path = path.rstrip("/")
        if _RECURSIVE_SUFFIX in path or ":" in path:
            raise InvalidFilterSyntax(f"Invalid recursive build target pattern: {pattern!r}")
        return BuildTargetPattern(
            kind=BuildTargetPatternKind.RECURSIVE,
            cell=cell or None,
            path=path,
        )

    if _RECURSIVE_SUFFIX in rest:
        raise InvalidFilterSyntax(f"'...' must terminate the pattern: {pattern!r}")

    if ":" in rest:
        path, _, name = rest.partition(":")
        if ":" in name:
            raise InvalidFilterSyntax(f"Invalid build target pattern: {pattern!r}")
        path = path.strip("/")
        if not name:
            return BuildTargetPattern(
                kind=BuildTargetPatternKind.PACKAGE,
                cell=cell or None,
                path=path,
            )
        return BuildTargetPattern(
            kind=BuildTargetPatternKind.SINGLE,
            cell=cell or None,
            path=path,
            name=name,
        )

    # `//foo/bar` is shorthand for `//foo/bar:bar`
    path = rest.strip("/")
    if not path:
        raise InvalidFilterSyntax(f"Build target pattern has no target: {pattern!r}")
    return BuildTargetPattern(
        kind=BuildTargetPatternKind.SINGLE,
        cell=cell or None,
        path=path,
        name=path.rsplit("/", 1)[-1],
    )


__all__ = [
    "BuildTargetPattern",
    "BuildTargetPatternKind",
    "parse_build_target_pattern",
]
