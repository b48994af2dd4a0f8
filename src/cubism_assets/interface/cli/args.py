from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema: one sub-command per hook entry point
(bootstrap, patch-projects, process) sharing a common set of configuration
options. Provides logic to translate raw argparse namespaces into
configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from cubism_assets.domain import constants as const
from cubism_assets.infra.logging import get_default_log_path

COMMAND_BOOTSTRAP = "bootstrap"
COMMAND_PATCH_PROJECTS = "patch-projects"
COMMAND_PROCESS = "process"

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the cubism-assets CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    common = _build_common_parser()

    p = argparse.ArgumentParser(
        prog="cubism-assets",
        description="Run the Cubism asset pipeline hooks outside of the editor.",
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sub.add_parser(
        COMMAND_BOOTSTRAP,
        parents=[common],
        help="Create any missing builtin materials and the global mask texture.",
    )
    sub.add_parser(
        COMMAND_PATCH_PROJECTS,
        parents=[common],
        help="Force AllowUnsafeBlocks=true in the generated .csproj files.",
    )

    process = sub.add_parser(
        COMMAND_PROCESS,
        parents=[common],
        help="Dispatch one asset change cycle to the registered handlers.",
    )

    # --- Change Set ---
    process.add_argument(
        "--imported",
        nargs="*",
        default=[],
        metavar="PATH",
        help="Imported or re-imported asset paths, in processing order.",
    )
    process.add_argument(
        "--deleted",
        nargs="*",
        default=[],
        metavar="PATH",
        help="Deleted asset paths, in processing order.",
    )
    process.add_argument(
        "--moved-to",
        dest="moved_to",
        nargs="*",
        default=[],
        metavar="PATH",
        help="Destination paths of moved assets.",
    )
    process.add_argument(
        "--moved-from",
        dest="moved_from",
        nargs="*",
        default=[],
        metavar="PATH",
        help="Source paths of moved assets.",
    )

    # --- Handler Registry ---
    process.add_argument(
        "--handlers",
        dest="handlers_module",
        default=None,
        metavar="MODULE",
        help="Importable module exposing IMPORTERS and DELETERS suffix mappings.",
    )

    return p


def _build_common_parser() -> argparse.ArgumentParser:
    """Options accepted by every sub-command."""
    c = argparse.ArgumentParser(add_help=False)

    # --- Installation Discovery ---
    c.add_argument(
        "--search-root",
        dest="search_root",
        default=None,
        help=f"Directory searched for the SDK installation (default: {const.DEFAULT_SEARCH_ROOT}).",
    )
    c.add_argument(
        "--marker",
        dest="marker_name",
        default=None,
        help=f"Folder name identifying the SDK installation (default: {const.DEFAULT_MARKER_NAME}).",
    )
    c.add_argument(
        "--working-dir",
        dest="working_dir",
        default=None,
        help="Project directory; relative search roots are resolved against it.",
    )

    # --- Builtin Resources ---
    c.add_argument(
        "--per-file-gating",
        action="store_true",
        help="Create each missing material preset even if the Materials folder exists.",
    )

    # --- Configuration and Diagnostic Tools ---
    c.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    c.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    c.add_argument(
        "--save-config",
        action="store_true",
        help="Store the effective configuration as the new defaults and exit.",
    )
    c.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Also write the log to PATH (default location if PATH is omitted).",
    )
    c.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Format Selection ---
    c.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    return c

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["search_root"] = args.search_root
    overrides["marker_name"] = args.marker_name
    overrides["working_dir"] = args.working_dir

    if args.per_file_gating:
        overrides["material_gating"] = const.GATING_PER_FILE
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file is not None:
        overrides["log_file"] = args.log_file or get_default_log_path()

    return overrides


def change_lists(args: argparse.Namespace) -> Dict[str, List[str]]:
    """
    Collect the change set path lists of a 'process' invocation.
    """
    return {
        "imported": _clean_paths(getattr(args, "imported", None)),
        "deleted": _clean_paths(getattr(args, "deleted", None)),
        "moved_to": _clean_paths(getattr(args, "moved_to", None)),
        "moved_from": _clean_paths(getattr(args, "moved_from", None)),
    }

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _clean_paths(values: Optional[List[str]]) -> List[str]:
    """Drop blank entries while keeping the given order."""
    if not values:
        return []
    parts = [x.strip() for x in values]
    return [x for x in parts if x]
