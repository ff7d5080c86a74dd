from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies sub-command parsing and the mapping of flags to configuration
overrides.
"""

import pytest

from vsdeploy.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_sync_command_arguments() -> None:
    args = parse_args(["add-files", "proj", "pkg", "--filter", "*.dll", "--case-insensitive"])

    assert args.command == "add-files"
    assert args.dest == "proj"
    assert args.source == "pkg"

    overrides = args_to_overrides(args)
    assert overrides["default_pattern"] == "*.dll"
    assert overrides["case_sensitive"] is False


def test_case_flags_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        parse_args(["remove-files", "p", "s", "--case-sensitive", "--case-insensitive"])


def test_no_overrides_without_flags() -> None:
    assert args_to_overrides(parse_args(["dump-config"])) == {}


def test_global_flags_mapping() -> None:
    args = parse_args(["--debug", "--json", "dump-config"])
    overrides = args_to_overrides(args)

    assert overrides["log_level"] == "DEBUG"
    assert "log_file" not in overrides
    assert args.json_output is True


def test_log_to_file_flag_does_not_consume_command() -> None:
    args = parse_args(["--log-to-file", "dump-config"])
    assert args.command == "dump-config"
    assert args_to_overrides(args)["log_file"] == "default"


def test_log_file_path_wins_over_default_location() -> None:
    args = parse_args(["--log-file", "run.log", "--log-to-file", "add-files", "proj", "pkg"])
    assert args.command == "add-files"
    assert args_to_overrides(args)["log_file"] == "run.log"


def test_step_slot_is_case_insensitive() -> None:
    args = parse_args(["add-step", "App.csproj", "POST", "echo hi"])
    assert args.slot == "post"
    assert args.step == "echo hi"


def test_step_rejects_unknown_slot() -> None:
    with pytest.raises(SystemExit):
        parse_args(["add-step", "App.csproj", "link", "echo hi"])


def test_copy_step_defaults() -> None:
    args = parse_args(["copy-step", "--install-root", "C:\\sln\\pkg", "--solution-root", "C:\\sln"])
    assert args.source_subpath == ""
    assert args.target_subpath == ""
    assert args.slot == "post"
    assert args.project is None


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        parse_args([])
