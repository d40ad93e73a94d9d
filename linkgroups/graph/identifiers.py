"""Target identifiers for dependency graph nodes.

Targets use the canonical `cell//package:name` form. A configured target
carries an extra ` (configuration)` suffix which is dropped by
`TargetLabel.raw_target` so that matching can be done against the
unconfigured form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Union

_TARGET_RE = re.compile(
    r"^(?P<cell>[^/\s:]*)//(?P<package>[^:\s]*)"
    r"(?::(?P<name>[^\s()]+))?"
    r"(?:\s+\((?P<configuration>[^)]*)\))?$"
)


@dataclass(frozen=True, order=True)
class TargetLabel:
    """Immutable identifier for one node of the dependency graph.

    Attributes:
        cell: Cell (repository) name, empty for the root cell.
        package: Package path relative to the cell root, without slashes at
            either end.
        name: Target name inside the package.
        configuration: Optional configuration suffix, empty when unconfigured.
    """

    cell: str
    package: str
    name: str
    configuration: str = ""

    @classmethod
    def parse(cls, text: Union[str, "TargetLabel"]) -> "TargetLabel":
        """Parse `cell//package:name (configuration)` into a TargetLabel.

        The `:name` part may be omitted, in which case the last package
        component is used (`//foo/bar` is `//foo/bar:bar`).

        Raises:
            ValueError: If the text is not a well-formed target.
        """
        if isinstance(text, TargetLabel):
            return text

        match = _TARGET_RE.match(str(text).strip())
        if not match:
            raise ValueError(f"Invalid target label: {text!r}")

        package = match.group("package").strip("/")
        name = match.group("name")
        if not name:
            if not package:
                raise ValueError(f"Target label has no name: {text!r}")
            name = package.rsplit("/", 1)[-1]

        return cls(
            cell=match.group("cell"),
            package=package,
            name=name,
            configuration=match.group("configuration") or "",
        )

    def raw_target(self) -> "TargetLabel":
        """Return the unconfigured form of this target."""
        if not self.configuration:
            return self
        return replace(self, configuration="")

    def __str__(self) -> str:
        base = f"{self.cell}//{self.package}:{self.name}"
        if self.configuration:
            return f"{base} ({self.configuration})"
        return base


__all__ = ["TargetLabel"]
