"""Name generation for dynamically derived groups.

Generated names must be reproducible across processes and machines since
they end up in artifact names, so hashing never relies on Python's
randomized `hash()`.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("linkgroups.groups.naming")

# Maximum filename length on unix is 255. Libraries get a "lib" prefix (3)
# and at most a ".dylib" suffix (6), leaving 246 for the group name.
# Only generated subfolder names are capped: the hashed form keeps the full
# declaring group name as its prefix, so a group name longer than about 234
# characters still yields a name over the limit.
MAX_GROUP_NAME_LENGTH = 255 - 3 - 6


def stable_string_hash(text: str) -> int:
    """Return a deterministic signed 32-bit hash of `text`.

    Computes `h = 31 * h + unit` over the UTF-16 code units of the string,
    wrapped to a signed 32-bit integer (the `String.hashCode` scheme).
    """
    h = 0
    data = text.encode("utf-16-be")
    for i in range(0, len(data), 2):
        unit = (data[i] << 8) | data[i + 1]
        h = (31 * h + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def hash_group_name(prefix: str, name: str) -> str:
    """Create a new group name from `prefix` and a stable hash of `name`."""
    return f"{prefix}_{stable_string_hash(name)}"


def generate_group_subfolder_name(group: str, package: str) -> str:
    """Derive the group name used for a target under `subfolders` traversal.

    Args:
        group: Name of the declaring group.
        package: Package path of the matched target.

    Returns:
        str: `<group>_<package with '/' replaced by '_'>`, or a hashed
        name when that would exceed MAX_GROUP_NAME_LENGTH.
    """
    name = group + "_" + package.replace("/", "_")

    if len(name) > MAX_GROUP_NAME_LENGTH:
        hashed = hash_group_name(group, name)
        logger.debug("Subfolder group name too long (%d), using %s", len(name), hashed)
        name = hashed
    return name


__all__ = [
    "MAX_GROUP_NAME_LENGTH",
    "generate_group_subfolder_name",
    "hash_group_name",
    "stable_string_hash",
]
