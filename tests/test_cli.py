"""Tests for linkgroups CLI entrypoints."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

import linkgroups.main as main
from linkgroups.cli import assign as assign_module
from linkgroups.cli.roots import roots_command

GROUPS_TOML = """
[[groups]]
name = "app"

[[groups.mappings]]
root = "//app:main"
traversal = "tree"

[[groups]]
name = "plugins"

[[groups.mappings]]
traversal = "subfolders"
filters = "label:plugin"
"""


def _write_inputs(tmp_path: Path) -> tuple[Path, Path]:
    graph_path = tmp_path / "graph.json"
    graph_path.write_text(
        json.dumps(
            {
                "nodes": {
                    "//app:main": {"deps": ["//lib:core"]},
                    "//lib:core": {},
                    "//plugins/audio:mp3": {"labels": ["plugin"]},
                    "//orphan:x": {},
                }
            }
        ),
        encoding="utf-8",
    )
    config_path = tmp_path / "groups.toml"
    config_path.write_text(GROUPS_TOML, encoding="utf-8")
    return graph_path, config_path


def test_main_dispatches_assign_command(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """`main` parses arguments and writes the group map report."""

    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    graph_path, config_path = _write_inputs(tmp_path)
    output = tmp_path / "out" / "map.json"

    argv = [
        "linkgroups",
        "assign",
        str(graph_path),
        "-c",
        str(config_path),
        "-o",
        str(output),
        "--quiet",
    ]
    monkeypatch.setattr(sys, "argv", argv)

    assert main.main() == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["mappings"] == {
        "//app:main": "app",
        "//lib:core": "app",
        "//plugins/audio:mp3": "plugins_plugins_audio",
    }
    assert set(data["groups"]) == {"app", "plugins", "plugins_plugins_audio"}


def test_main_requires_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Missing subcommands make the CLI print help and fail."""

    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(sys, "argv", ["linkgroups"])

    assert main.main() == 1
    assert "Linkgroups" in capsys.readouterr().out


def test_assign_command_prints_summary(tmp_path: Path) -> None:
    graph_path, config_path = _write_inputs(tmp_path)
    buffer = io.StringIO()
    args = SimpleNamespace(
        graph=str(graph_path),
        config=str(config_path),
        output=str(tmp_path / "map.json"),
        workers=2,
        quiet=False,
    )

    exit_code = assign_module.assign_command(args, console=Console(file=buffer, width=120))

    assert exit_code == 0
    summary = buffer.getvalue()
    assert "plugins_plugins_audio" in summary
    assert "3 of 4 targets assigned" in summary


def test_assign_command_fails_on_invalid_definitions(tmp_path: Path) -> None:
    graph_path, _ = _write_inputs(tmp_path)
    args = SimpleNamespace(
        graph=str(graph_path),
        config='{"groups": [{"name": "g", "mappings": [{"root": "//a:a", "traversal": "sideways"}]}]}',
        output=str(tmp_path / "map.json"),
        workers=None,
        quiet=True,
    )

    assert assign_module.assign_command(args) == 1
    assert not (tmp_path / "map.json").exists()


def test_roots_command_lists_distinct_roots(tmp_path: Path) -> None:
    config = json.dumps(
        {
            "groups": [
                {"name": "a", "mappings": [{"root": "//x:one"}, {"root": "//x:two"}]},
                {"name": "b", "mappings": [{"root": "//x:one", "traversal": "node"}]},
            ]
        }
    )
    buffer = io.StringIO()

    assert roots_command(SimpleNamespace(config=config), console=Console(file=buffer)) == 0
    assert buffer.getvalue().splitlines() == ["//x:one", "//x:two"]
