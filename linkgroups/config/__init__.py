"""Configuration schema and loading for linkgroups."""

from .loader import ConfigSource, load_assign_config
from .schema import AssignConfig, GroupAttrsConfig, GroupConfig, MappingConfig

__all__ = [
    "AssignConfig",
    "ConfigSource",
    "GroupAttrsConfig",
    "GroupConfig",
    "MappingConfig",
    "load_assign_config",
]
