"""Assignment of build dependency graph targets to link groups."""

__version__ = "0.1.0"
