from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration loading and merging (defaults,
persisted file, command-line overrides), logging bootstrap, dispatch to the
installer helpers and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from vsdeploy.core.build_steps import add_build_step, remove_build_step
from vsdeploy.core.copy_step import LINE_SEPARATOR, generate_copy_step
from vsdeploy.core.tree_sync import add_tree, remove_tree
from vsdeploy.core.validator import validate_config
from vsdeploy.domain.config import get_default_config, load_config
from vsdeploy.domain.errors import InvalidPath, VsDeployError
from vsdeploy.domain.sync_models import SyncReport
from vsdeploy.infra.hosts import DirectoryNode, MemoryNode, ProjectFileTarget
from vsdeploy.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from vsdeploy.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid input).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_file = conf.get("log_file") or None
    if log_file == "default":
        log_file = get_default_log_path()
    configure_logging(LoggingConfig(level=conf["log_level"], console=True, log_file=log_file))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    handlers: Dict[str, Callable[[Any, Dict[str, Any]], int]] = {
        "add-files": _cmd_sync,
        "remove-files": _cmd_sync,
        "add-step": _cmd_step,
        "remove-step": _cmd_step,
        "copy-step": _cmd_copy_step,
        "dump-config": _cmd_dump_config,
    }

    # 3. Dispatch
    try:
        return handlers[args.command](args, conf)
    except InvalidPath as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except VsDeployError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Unexpected failure: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _cmd_sync(args: Any, conf: Dict[str, Any]) -> int:
    """add-files / remove-files"""
    source = os.path.abspath(args.source)
    dest = os.path.abspath(args.dest)

    for label, path in (("Source", source), ("Destination", dest)):
        if not os.path.isdir(path):
            msg = f"{label} directory does not exist: {path}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return EXIT_INVALID_INPUT

    root = MemoryNode.from_directory(dest) if args.dry_run else DirectoryNode(dest)
    sync = add_tree if args.command == "add-files" else remove_tree

    logger.info(f"{args.command}: '{source}' -> '{dest}'" + (" (dry run)" if args.dry_run else ""))
    report = sync(
        root,
        source,
        conf["default_pattern"],
        case_sensitive=conf["case_sensitive"],
    )

    if args.json_output:
        payload = asdict(report)
        payload["ok"] = report.ok
        payload["dry_run"] = bool(args.dry_run)
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_sync_summary(report, dry_run=bool(args.dry_run))

    return EXIT_OK if report.ok else EXIT_FAILURE


def _cmd_step(args: Any, conf: Dict[str, Any]) -> int:
    """add-step / remove-step"""
    target = ProjectFileTarget(args.project)
    edit = add_build_step if args.command == "add-step" else remove_build_step
    changed = edit(target, args.slot, args.step)
    target.save()

    _emit(args, {"project": target.path, "slot": args.slot, "changed": changed},
          "Build event updated." if changed else "Build event unchanged.")
    return EXIT_OK


def _cmd_copy_step(args: Any, conf: Dict[str, Any]) -> int:
    """copy-step"""
    fragment = generate_copy_step(
        args.install_root,
        args.solution_root,
        args.source_subpath,
        args.target_subpath,
        solution_dir_token=conf["solution_dir_token"],
        target_dir_token=conf["target_dir_token"],
    )

    changed = False
    if args.project:
        target = ProjectFileTarget(args.project)
        changed = add_build_step(target, args.slot, fragment + LINE_SEPARATOR)
        target.save()

    if args.json_output:
        print(json.dumps({"command": fragment, "project": args.project, "changed": changed}, indent=2))
    else:
        print(fragment.replace(LINE_SEPARATOR, "\n"))
    return EXIT_OK


def _cmd_dump_config(args: Any, conf: Dict[str, Any]) -> int:
    """dump-config"""
    print(json.dumps(conf, ensure_ascii=False, indent=2))
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of known, non-null override values into the base configuration.
    """
    out = dict(base)
    keys_to_merge = [
        "default_pattern", "case_sensitive", "solution_dir_token",
        "target_dir_token", "log_level", "log_file",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _emit(args: Any, payload: Dict[str, Any], message: str) -> None:
    if args.json_output:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(message)


def _print_sync_summary(report: SyncReport, dry_run: bool = False) -> None:
    """
    Format and print a synchronization report to the standard output.
    """
    if dry_run:
        print("DRY RUN: no files were changed.")

    rows = [
        ("Added", report.added),
        ("Removed", report.removed),
        ("Folders pruned", report.pruned),
        ("Skipped", report.skipped),
    ]
    for label, items in rows:
        if items:
            print(f"{label}: {len(items)}")
            for item in items:
                print(f"  - {item}")

    if report.errors:
        print(f"Failed: {len(report.errors)}", file=sys.stderr)
        for err in report.errors:
            print(f"  - {err.rel_path}: {err.error}", file=sys.stderr)

    if not any(items for _, items in rows) and not report.errors:
        print("Nothing to do.")
