"""Tests for group configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from linkgroups.config import AssignConfig, load_assign_config
from linkgroups.groups.errors import UnknownAttribute
from linkgroups.groups.parse import parse_groups_definitions

TOML_CONFIG = """
max_workers = 2

[[groups]]
name = "app"
attrs = { linker_flags = ["-s"] }

[[groups.mappings]]
root = "//app:main"
traversal = "tree"

[[groups]]
name = "plugins"

[[groups.mappings]]
traversal = "subfolders"
filters = ["label:plugin", "pattern://plugins/..."]
preferred_linkage = "shared"
"""


def test_load_toml_file(tmp_path: Path) -> None:
    path = tmp_path / "groups.toml"
    path.write_text(TOML_CONFIG, encoding="utf-8")

    config = load_assign_config(path)

    assert config.max_workers == 2
    assert [g.name for g in config.groups] == ["app", "plugins"]
    assert config.to_raw_definitions() == [
        ("app", [("//app:main", "tree", None, None)], {"linker_flags": ["-s"]}),
        (
            "plugins",
            [(None, "subfolders", ["label:plugin", "pattern://plugins/..."], "shared")],
            {},
        ),
    ]


def test_load_inline_json_and_dict() -> None:
    data = {"groups": [{"name": "g", "mappings": [{"root": "//a:a", "traversal": "node"}]}]}

    from_text = load_assign_config(json.dumps(data))
    from_dict = load_assign_config(data)

    assert from_text == from_dict
    assert from_dict.max_workers == 1


def test_load_inline_toml() -> None:
    config = load_assign_config(TOML_CONFIG)

    assert len(config.groups) == 2


def test_none_returns_empty_config() -> None:
    assert load_assign_config(None) == AssignConfig()


def test_invalid_sources_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        load_assign_config(42)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        load_assign_config("[1, 2]")
    with pytest.raises(ValueError):
        load_assign_config("groups = [")


def test_schema_validation_errors() -> None:
    with pytest.raises(ValidationError):
        AssignConfig.from_dict({"max_workers": 0})
    with pytest.raises(ValidationError):
        AssignConfig.from_dict({"groups": [{"name": "a"}, {"name": "a"}]})
    with pytest.raises(ValidationError):
        AssignConfig.from_dict({"groups": [{"name": "a", "mappings": [{"roots": "//x:x"}]}]})


def test_round_trip_dict() -> None:
    config = load_assign_config(TOML_CONFIG)

    assert AssignConfig.from_dict(config.to_dict()) == config


def test_attrs_are_typed() -> None:
    with pytest.raises(ValidationError):
        AssignConfig.from_dict(
            {"groups": [{"name": "g", "attrs": {"linker_flags": "-Wl,--gc-sections"}}]}
        )

    config = AssignConfig.from_dict(
        {"groups": [{"name": "g", "attrs": {"discard_group": "false"}}]}
    )

    assert config.groups[0].attrs.discard_group is False
    groups = parse_groups_definitions(config.to_raw_definitions())
    assert groups[0].attrs.discard_group is False
    assert groups[0].attrs.linker_flags == ()


def test_unknown_attrs_reach_the_parser() -> None:
    config = AssignConfig.from_dict({"groups": [{"name": "g", "attrs": {"visibility": "public"}}]})

    with pytest.raises(UnknownAttribute):
        parse_groups_definitions(config.to_raw_definitions())


def test_empty_root_in_config_parses_to_no_roots() -> None:
    config = load_assign_config(
        '{"groups": [{"name": "g", "mappings": [{"root": "", "traversal": "node", "filters": "label:x"}]}]}'
    )

    groups = parse_groups_definitions(config.to_raw_definitions())

    assert groups[0].mappings[0].roots == ()
