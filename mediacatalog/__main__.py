"""Entry point for the mediacatalog package.

This module provides the command-line entry point for the catalog.
Run with: python -m mediacatalog
"""

import sys
from typing import List, Optional

from loguru import logger

from mediacatalog.catalog.store import CatalogStore
from mediacatalog.commands import run_command
from mediacatalog.config.cli import args_to_cli_args, parse_arguments
from mediacatalog.config.settings import LOG_FILENAME
from mediacatalog.storage.exceptions import PersistenceError
from mediacatalog.ui.console import ConsoleUI

EXIT_PERSISTENCE_ERROR = 2


def setup_logging(debug: bool = False) -> None:
    """
    Configure loguru logging.

    Args:
        debug: If True, enable debug-level logging on the console.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    logger.add(
        LOG_FILENAME,
        rotation="10 MB",
        retention="7 days",
        level="DEBUG" if debug else "INFO",
    )


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the catalog CLI.

    Args:
        args: Argument list (None for sys.argv).

    Returns:
        Exit code (0 for success, 1 for a rejected command, 2 when the
        catalog could not be saved).
    """
    cli_args = args_to_cli_args(parse_arguments(args))
    setup_logging(cli_args.debug)
    console = ConsoleUI()

    try:
        with CatalogStore.open(cli_args.db_path, seed=cli_args.seed) as store:
            return run_command(store, cli_args, console)
    except PersistenceError as e:
        logger.error(f"Catalog could not be saved: {e}")
        console.print_error(f"Your changes could not be saved: {e}")
        return EXIT_PERSISTENCE_ERROR


if __name__ == "__main__":
    sys.exit(main())
