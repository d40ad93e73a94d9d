"""Error hierarchy for group definition parsing and assignment.

All errors are fatal: they abort the computation immediately. There is no
partial result since assignment is a pure function of its inputs.
"""


class GroupError(Exception):
    """Base class for all group definition and assignment errors."""
    pass


class UnknownAttribute(GroupError):
    """A group attribute key outside the recognized set."""
    pass


class UnrecognizedTraversalKind(GroupError):
    """A traversal string other than `tree`, `node` or `subfolders`."""
    pass


class InvalidFilterSyntax(GroupError):
    """A filter string without a recognized prefix, or a malformed pattern."""
    pass


class MissingRootOrFilter(GroupError):
    """A mapping that supplies neither roots nor filters."""
    pass


class UnknownFilterKind(GroupError):
    """A filter object outside the known filter variants."""
    pass


class InvalidAttributeValue(GroupError):
    """A recognized group attribute holding a value of the wrong type."""
    pass


class UnrecognizedLinkageKind(GroupError):
    """A preferred linkage other than `any`, `static` or `shared`."""
    pass


__all__ = [
    "GroupError",
    "InvalidAttributeValue",
    "InvalidFilterSyntax",
    "MissingRootOrFilter",
    "UnknownAttribute",
    "UnknownFilterKind",
    "UnrecognizedLinkageKind",
    "UnrecognizedTraversalKind",
]
