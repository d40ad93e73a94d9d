"""Helpers for loading group configuration from TOML/JSON sources.

`load_assign_config` accepts:

* None -> empty AssignConfig
* dict -> AssignConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from linkgroups.config.schema import AssignConfig

logger = logging.getLogger("linkgroups.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _guess_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def load_assign_config(source: ConfigSource) -> AssignConfig:
    """Load AssignConfig from various configuration sources.

    Args:
        source: None, an already-parsed mapping, a path to a .toml/.json
            file, or an inline TOML/JSON string (auto-detected).

    Returns:
        AssignConfig instance.

    Raises:
        ValueError: If the document is not a mapping or cannot be decoded.
        TypeError: For unsupported source types.
    """
    if source is None:
        logger.debug("No config source provided; using empty AssignConfig")
        return AssignConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading AssignConfig from provided dict")
        return AssignConfig.from_dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        try:
            is_file = path.is_file()
        except OSError:
            # Inline documents can exceed the maximum path length.
            is_file = False

        if is_file:
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _guess_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _guess_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        if fmt == "json":
            data = json.loads(text)
        else:
            try:
                data = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ValueError(f"Invalid TOML configuration: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        return AssignConfig.from_dict(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "load_assign_config"]
