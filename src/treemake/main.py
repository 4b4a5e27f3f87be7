from __future__ import annotations

"""
Process Entry Point.

Runs the CLI under a supervisor that turns any unexpected exception into a
logged critical record, a stack trace on stderr and exit code 1.
"""

import logging
import os
import sys
import traceback
from typing import List, Optional

# Allow 'python src/treemake/main.py' from a source checkout
_SRC_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _SRC_ROOT not in sys.path:
    sys.path.insert(0, _SRC_ROOT)

logger = logging.getLogger("treemake.supervisor")


def report_crash(error: BaseException) -> None:
    """Log an unexpected exception and print its full trace to stderr."""
    logger.critical(f"Unhandled {type(error).__name__}: {error}")

    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    banner = "=" * 80
    sys.stderr.write(f"\n{banner}\nCRITICAL ERROR (TREEMAKE)\n{banner}\n{trace}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the treemake CLI.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:].

    Returns:
        int: Process exit code.
    """
    from treemake.interface.cli.app import main as cli_main

    try:
        return cli_main(argv)
    except Exception as e:
        report_crash(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
