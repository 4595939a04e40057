from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. The required positional scene path.
2. Mapping of CLI flags to configuration keys.
3. The --version flag.
"""

import pytest

from scenetree.domain.constants import APP_VERSION
from scenetree.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_file_argument_is_required(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args([])
    assert exc.value.code == 2
    assert "file" in capsys.readouterr().err


def test_defaults_only_carry_input_path():
    overrides = args_to_overrides(parse_args(["level.tscn"]))
    assert overrides == {"input_path": "level.tscn"}


def test_cli_flags_mapping():
    args = parse_args([
        "level.tscn",
        "--no-params",
        "--no-sub-params",
        "--no-connections",
        "--max-depth", "2",
        "--json",
    ])

    overrides = args_to_overrides(args)

    assert overrides == {
        "input_path": "level.tscn",
        "show_parameters": False,
        "show_sub_params": False,
        "show_connections": False,
        "max_depth": 2,
        "output_format": "json",
    }


def test_diagnostic_flags_are_not_config_overrides():
    args = parse_args(["level.tscn", "--debug", "--log-file", "/tmp/x.log"])

    assert args.debug is True
    assert args.log_file == "/tmp/x.log"
    assert "debug" not in args_to_overrides(args)


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--version"])
    assert exc.value.code == 0
    assert APP_VERSION in capsys.readouterr().out
