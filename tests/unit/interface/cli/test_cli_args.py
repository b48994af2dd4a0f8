from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Sub-command selection and shared options.
2. Mapping of CLI flags to configuration overrides.
3. Collection of change set path lists.
"""

from unittest.mock import patch

import pytest

from cubism_assets.interface.cli.args import (
    COMMAND_BOOTSTRAP,
    COMMAND_PROCESS,
    args_to_overrides,
    build_parser,
    change_lists,
)


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_requires_a_command() -> None:
    """A bare invocation is a usage error."""
    with pytest.raises(SystemExit):
        parse_args([])


def test_cli_shared_options_mapping() -> None:
    """Shared options become configuration overrides."""
    args = parse_args([
        COMMAND_BOOTSTRAP,
        "--search-root", "Game/Assets",
        "--marker", "CubismSDK",
        "--working-dir", "/project",
        "--per-file-gating",
        "--debug",
    ])

    overrides = args_to_overrides(args)

    assert args.command == COMMAND_BOOTSTRAP
    assert overrides["search_root"] == "Game/Assets"
    assert overrides["marker_name"] == "CubismSDK"
    assert overrides["working_dir"] == "/project"
    assert overrides["material_gating"] == "per_file"
    assert overrides["log_level"] == "DEBUG"


def test_cli_unset_options_map_to_none() -> None:
    """Options not given on the command line do not override anything."""
    overrides = args_to_overrides(parse_args(["patch-projects"]))

    assert overrides["search_root"] is None
    assert "material_gating" not in overrides
    assert "log_level" not in overrides


def test_cli_process_change_lists() -> None:
    """Path lists keep their order and drop blank entries."""
    args = parse_args([
        COMMAND_PROCESS,
        "--imported", "Assets/b.moc3", " ", "Assets/a.moc3",
        "--deleted", "Assets/old.moc3",
        "--moved-to", "Assets/new.png",
        "--moved-from", "Assets/prev.png",
        "--handlers", "my_project.hooks",
        "--json",
    ])

    lists = change_lists(args)

    assert lists["imported"] == ["Assets/b.moc3", "Assets/a.moc3"]
    assert lists["deleted"] == ["Assets/old.moc3"]
    assert lists["moved_to"] == ["Assets/new.png"]
    assert lists["moved_from"] == ["Assets/prev.png"]
    assert args.handlers_module == "my_project.hooks"
    assert args.json_output is True


def test_cli_change_lists_outside_process_are_empty() -> None:
    """Other commands carry no change set."""
    lists = change_lists(parse_args([COMMAND_BOOTSTRAP]))

    assert lists == {"imported": [], "deleted": [], "moved_to": [], "moved_from": []}


def test_cli_log_file_option() -> None:
    """An explicit path is kept and a bare flag resolves to the default location."""
    explicit = args_to_overrides(parse_args([COMMAND_BOOTSTRAP, "--log-file", "/tmp/hook.log"]))
    assert explicit["log_file"] == "/tmp/hook.log"

    with patch("cubism_assets.interface.cli.args.get_default_log_path", return_value="/data/logs/x.log"):
        bare = args_to_overrides(parse_args([COMMAND_BOOTSTRAP, "--log-file"]))
    assert bare["log_file"] == "/data/logs/x.log"

    assert "log_file" not in args_to_overrides(parse_args([COMMAND_BOOTSTRAP]))
