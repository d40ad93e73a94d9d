"""Configuration schema definitions using Pydantic for validation.

These models describe the user-facing group configuration file. They only
check structure and types; group semantics (attribute keys, traversal
kinds, filter syntax) are validated by `linkgroups.groups.parse` so that
its dedicated errors are raised.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator


class MappingConfig(BaseModel):
    """One mapping of a group.

    Attributes:
        root: Optional root target (`cell//package:name`).
        traversal: Traversal kind (`tree`, `node` or `subfolders`).
        filters: A filter string, a list of filter strings, or None.
        preferred_linkage: Optional linkage hint (`any`, `static`, `shared`).
    """

    root: Optional[str] = None
    traversal: str = "tree"
    filters: Union[str, List[str], None] = None
    preferred_linkage: Optional[str] = None

    model_config = {"extra": "forbid"}

    def to_raw(self) -> Tuple[Any, ...]:
        """Return the `(root, traversal, filters, preferred_linkage)` tuple."""
        return (self.root, self.traversal, self.filters, self.preferred_linkage)


class GroupAttrsConfig(BaseModel):
    """Link-step attributes of a group.

    Unknown keys are kept so that the parser reports them as
    `UnknownAttribute`.
    """

    enable_distributed_thinlto: bool = False
    enable_if_node_count_exceeds: Optional[int] = None
    exported_linker_flags: List[str] = Field(default_factory=list)
    discard_group: bool = False
    linker_flags: List[str] = Field(default_factory=list)
    requires_root_node_exists: bool = True

    model_config = {"extra": "allow"}

    def to_raw(self) -> Dict[str, Any]:
        """Return only the attributes given explicitly, extras included."""
        return {**self.model_dump(exclude_unset=True), **(self.model_extra or {})}


class GroupConfig(BaseModel):
    """A group definition.

    Attributes:
        name: Group name.
        mappings: Ordered mappings.
        attrs: Link-step attributes; keys are validated when parsed.
    """

    name: str = Field(min_length=1)
    mappings: List[MappingConfig] = Field(default_factory=list)
    attrs: GroupAttrsConfig = Field(default_factory=GroupAttrsConfig)

    model_config = {"extra": "forbid"}


class AssignConfig(BaseModel):
    """Top-level configuration for a group assignment run.

    Attributes:
        groups: Group definitions in precedence order.
        max_workers: Threads used to resolve mappings (1 = sequential).
    """

    groups: List[GroupConfig] = Field(default_factory=list)
    max_workers: int = Field(default=1, ge=1, le=64)

    model_config = {"extra": "allow"}

    @field_validator("groups")
    @classmethod
    def validate_unique_names(cls, v: List[GroupConfig]) -> List[GroupConfig]:
        """Reject configurations that declare the same group name twice."""
        seen = set()
        for group in v:
            if group.name in seen:
                raise ValueError(f"Duplicate group name '{group.name}'")
            seen.add(group.name)
        return v

    def to_raw_definitions(self) -> List[Tuple[Any, ...]]:
        """Return raw `(name, mappings, attrs)` definitions for the parser."""
        return [
            (group.name, [m.to_raw() for m in group.mappings], group.attrs.to_raw())
            for group in self.groups
        ]

    @classmethod
    def default(cls) -> "AssignConfig":
        """Return an empty configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssignConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
