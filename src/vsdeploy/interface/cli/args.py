from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global flags plus one sub-command per
installer helper) and translates parsed namespaces into configuration
overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the vsdeploy CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="vsdeploy",
        description="Installer helpers for Visual Studio project integration.",
    )

    # --- Diagnostics and configuration ---
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    p.add_argument("--json", dest="json_output", action="store_true", help="Print results as JSON.")
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        metavar="PATH",
        default=None,
        help="Also write logs to PATH.",
    )
    p.add_argument(
        "--log-to-file",
        action="store_true",
        help="Also write logs to vsdeploy.log in the user data directory.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- File synchronization ---
    for name, help_text in (
        ("add-files", "Mirror package files into a project folder."),
        ("remove-files", "Remove previously mirrored package files."),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("dest", help="Project folder that mirrors the source directory.")
        sp.add_argument("source", help="Package directory to scan.")
        sp.add_argument(
            "-f", "--filter",
            dest="pattern",
            default=None,
            help="Glob applied to file names (default: configured pattern, '*').",
        )
        case = sp.add_mutually_exclusive_group()
        case.add_argument(
            "--case-sensitive",
            dest="case_sensitive",
            action="store_const",
            const=True,
            default=None,
            help="Treat 'Lib' and 'lib' as different entries.",
        )
        case.add_argument(
            "--case-insensitive",
            dest="case_sensitive",
            action="store_const",
            const=False,
            help="Treat 'Lib' and 'lib' as the same entry.",
        )
        sp.add_argument(
            "--dry-run",
            action="store_true",
            help="Synchronize an in-memory snapshot instead of the real folder.",
        )

    # --- Build events ---
    for name, help_text in (
        ("add-step", "Append a command to a build event."),
        ("remove-step", "Remove a command from a build event."),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("project", help="MSBuild project file (.csproj, .vcxproj, ...).")
        sp.add_argument("slot", type=str.lower, choices=["pre", "post"], help="Build event to edit.")
        sp.add_argument("step", help="Command text.")

    # --- Copy command generation ---
    sp = sub.add_parser("copy-step", help="Generate a build-time copy command.")
    sp.add_argument("--install-root", required=True, help="Directory the package was installed to.")
    sp.add_argument("--solution-root", required=True, help="Directory containing the solution.")
    sp.add_argument("--source", dest="source_subpath", default="", help="Folder under the install root.")
    sp.add_argument("--target", dest="target_subpath", default="", help="Folder under the build output.")
    sp.add_argument("--project", default=None, help="Also append the command to this project file.")
    sp.add_argument(
        "--slot",
        type=str.lower,
        choices=["pre", "post"],
        default="post",
        help="Build event receiving the command when --project is given.",
    )

    sub.add_parser("dump-config", help="Print the effective configuration.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only values explicitly given on the command line are returned.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file:
        overrides["log_file"] = args.log_file
    elif args.log_to_file:
        overrides["log_file"] = "default"

    pattern = getattr(args, "pattern", None)
    if pattern:
        overrides["default_pattern"] = pattern

    case_sensitive = getattr(args, "case_sensitive", None)
    if case_sensitive is not None:
        overrides["case_sensitive"] = case_sensitive

    return overrides
