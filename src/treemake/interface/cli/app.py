from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, toolchain resolution
(defaults merged with an optional JSON file), dispatch to the generation
engine and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import List, Optional

from treemake.core.engine import run_project, run_recursive
from treemake.domain.config import DEFAULT_TOOLCHAIN, ToolchainConfig, load_toolchain, toolchain_to_dict
from treemake.domain.errors import ConfigError
from treemake.domain.generation_models import ERROR_INPUT, GenerationResult
from treemake.infra.logging import LoggingConfig, configure_logging, get_logger
from treemake.interface.cli import args as cli_args

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
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file))

    # 1. Toolchain resolution
    try:
        toolchain = _resolve_toolchain(args.config_path)
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if args.command == "dump-config":
        print(json.dumps(toolchain_to_dict(toolchain), indent=2))
        return EXIT_OK

    # 2. Generation
    try:
        if args.command == "project":
            try:
                repositories = cli_args.args_to_repositories(args)
            except ValueError as e:
                print(f"ERROR: {e}", file=sys.stderr)
                return EXIT_INVALID_INPUT
            result = run_project(
                args.root,
                args.archive,
                toolchain=toolchain,
                repositories=repositories,
                test_binary=args.test_binary,
                dry_run=args.dry_run,
            )
        else:
            result = run_recursive(
                args.root,
                toolchain=toolchain,
                only=args.only,
                dry_run=args.dry_run,
            )
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    # 3. Output rendering
    if args.json_output:
        print(json.dumps(asdict(result), indent=2))
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    return EXIT_INVALID_INPUT if result.error_kind == ERROR_INPUT else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------

def _resolve_toolchain(config_path: Optional[str]) -> ToolchainConfig:
    if not config_path:
        return DEFAULT_TOOLCHAIN
    logger.debug(f"Loading toolchain overrides from {config_path}")
    return load_toolchain(config_path)

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: GenerationResult) -> None:
    """Print the generation result to standard output."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    if result.dry_run:
        print(f"Dry run: would generate Makefiles under {result.root_path}")
    else:
        print(f"Generated Makefiles under {result.root_path}")
    for path in result.written_files:
        print(f"  - {path}")

    if result.archives:
        print("Archives:")
        for archive in result.archives:
            print(f"  - {archive}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
