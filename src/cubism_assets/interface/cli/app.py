from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and merging
of configuration sources (defaults, persistent storage, and CLI overrides),
execution of the requested hook, and result rendering. Lets the pipeline
hooks run in headless environments and build scripts.
"""

import importlib
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from cubism_assets.core.project.patcher import patch_all_project_files
from cubism_assets.core.resources.factory import YamlResourceFactory
from cubism_assets.core.services.bootstrapper import ResourceBootstrapper
from cubism_assets.core.services.validator import validate_config
from cubism_assets.domain.bootstrap_models import BootstrapResult
from cubism_assets.domain.change_models import DispatchResult
from cubism_assets.domain.config import (
    get_config_file,
    get_default_config,
    load_config,
    save_config,
)
from cubism_assets.domain.patch_models import PatchResult
from cubism_assets.infra.fs import resolve_under
from cubism_assets.infra.logging import LoggingConfig, configure_logging
from cubism_assets.interface.cli import args as cli_args
from cubism_assets.interface.host.postprocessor import create_postprocessor

logger = logging.getLogger(__name__)

Result = Union[BootstrapResult, PatchResult, DispatchResult]

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 operation failure, 2 invalid input).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (CLI-specific: Console stderr)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=None))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (Default vs Persistent state)
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config()

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if clean_conf["log_file"] or clean_conf["log_level"] != log_level:
        configure_logging(
            LoggingConfig(
                level=clean_conf["log_level"],
                console=True,
                log_file=clean_conf["log_file"] or None,
            ),
            force=True,
        )

    # Short-circuit if configuration dump is requested
    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        if not save_config(clean_conf):
            print(f"ERROR: could not write {get_config_file()}", file=sys.stderr)
            return 1
        print(f"Configuration saved to {get_config_file()}")
        return 0

    # 6. Pre-flight input verification
    working_dir = os.path.abspath(clean_conf["working_dir"])
    if not os.path.isdir(working_dir):
        msg = f"Working directory does not exist: {working_dir}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2
    clean_conf["working_dir"] = working_dir

    importers: Mapping[str, Any] = {}
    deleters: Mapping[str, Any] = {}
    if args.command == cli_args.COMMAND_PROCESS and args.handlers_module:
        try:
            importers, deleters = _load_handlers(args.handlers_module)
        except (ImportError, TypeError) as e:
            msg = f"Cannot load handler module '{args.handlers_module}': {e}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return 2

    # 7. Hook execution phase
    logger.info(f"Running '{args.command}' in {working_dir}")
    try:
        if args.command == cli_args.COMMAND_BOOTSTRAP:
            result: Result = _run_bootstrap(clean_conf)
        elif args.command == cli_args.COMMAND_PATCH_PROJECTS:
            result = patch_all_project_files(working_dir)
        else:
            postprocessor = create_postprocessor(clean_conf, importers, deleters)
            result = postprocessor.on_postprocess_all_assets(**cli_args.change_lists(args))
    except KeyboardInterrupt:
        msg = "Interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = f"'{args.command}' failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 8. Output rendering phase
    if args.json_output:
        payload = asdict(result)
        payload["ok"] = result.ok
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# HOOK RUNNERS
# -----------------------------------------------------------------------------

def _run_bootstrap(config: Dict[str, Any]) -> BootstrapResult:
    """Run the builtin resources bootstrap for the configured project."""
    bootstrapper = ResourceBootstrapper(YamlResourceFactory(), gating=config["material_gating"])
    search_root = resolve_under(config["working_dir"], config["search_root"])
    return bootstrapper.ensure_builtin_resources(search_root, config["marker_name"])


def _load_handlers(module_name: str) -> Tuple[Mapping[str, Any], Mapping[str, Any]]:
    """
    Import a handler module and read its IMPORTERS / DELETERS mappings.

    Missing attributes are treated as empty registries.

    Raises:
        ImportError: If the module cannot be imported.
        TypeError: If an attribute is present but not a mapping.
    """
    module = importlib.import_module(module_name)
    importers = getattr(module, "IMPORTERS", None) or {}
    deleters = getattr(module, "DELETERS", None) or {}

    for name, value in (("IMPORTERS", importers), ("DELETERS", deleters)):
        if not isinstance(value, Mapping):
            raise TypeError(f"{name} must be a mapping, got {type(value).__name__}")

    return importers, deleters

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged and None means 'not given on the command line'.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "search_root", "marker_name", "working_dir",
        "material_gating", "log_level", "log_file",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: Result) -> None:
    """
    Format and print a hook result to the standard output.

    Args:
        result: BootstrapResult, PatchResult or DispatchResult.
    """
    if isinstance(result, BootstrapResult):
        _print_bootstrap(result)
    elif isinstance(result, PatchResult):
        _print_patch(result)
    elif isinstance(result, DispatchResult):
        _print_dispatch(result)


def _print_bootstrap(result: BootstrapResult) -> None:
    if not result.ok:
        print(f"ERROR [{result.status}]: {result.error}", file=sys.stderr)
        return

    print(f"Installation folder: {result.install_root}")
    print(f"Resources folder: {result.resource_path}")
    if result.materials_dir_created:
        print("Materials folder created.")
    print(f"Created: {len(result.created)}")
    for path in result.created:
        print(f"  - {path}")
    print(f"Already present: {len(result.skipped)}")


def _print_patch(result: PatchResult) -> None:
    print(f"Project files patched: {len(result.patched)} ({result.sections} sections)")
    for path in result.patched:
        print(f"  - {path}")
    if result.excluded:
        print(f"Editor projects excluded: {len(result.excluded)}")
    for err in result.errors:
        print(f"ERROR: {err.path}: {err.error}", file=sys.stderr)


def _print_dispatch(result: DispatchResult) -> None:
    if result.bootstrap is None:
        print(f"ERROR: builtin resources could not be written: {result.bootstrap_error}", file=sys.stderr)
    else:
        _print_bootstrap(result.bootstrap)

    stats = {
        "Imported": len(result.imported),
        "Deleted": len(result.deleted),
        "Ignored": len(result.skipped),
        "Moved": result.moved_count,
    }
    for label, value in stats.items():
        print(f"{label}: {value}")

    for failure in result.failures:
        print(f"ERROR: {failure.operation} {failure.path}: {failure.error}", file=sys.stderr)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
