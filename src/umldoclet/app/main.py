"""umldoclet - main entry point."""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from typing import TYPE_CHECKING

from umldoclet.app.app_config import Config, overrides_from_args
from umldoclet.app.cli import CLI
from umldoclet.app.orchestrator import Orchestrator
from umldoclet.core.exceptions import UmlDocletError
from umldoclet.core.logger import get_loggers

if TYPE_CHECKING:
    import argparse

    from umldoclet.core.logger import SafeQueueListener
    from umldoclet.core.models.config_models import AppConfig

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _setup_environment(args: argparse.Namespace) -> tuple[AppConfig, logging.Logger, logging.Logger, SafeQueueListener | None]:
    """Load configuration and initialize logging.

    Args:
        args: Parsed command line arguments

    Returns:
        Tuple of (config, console_logger, error_logger, listener)

    """
    config = Config(args.config).load(overrides_from_args(args))
    console_logger, error_logger, listener = get_loggers(config)
    return config, console_logger, error_logger, listener


def _handle_keyboard_interrupt(console_logger: logging.Logger | None) -> int:
    """Handle keyboard interrupt gracefully."""
    if console_logger:
        console_logger.info("\nInterrupted by user.")
    return EXIT_INTERRUPTED


def _handle_critical_error(error: Exception, error_logger: logging.Logger | None) -> int:
    """Handle critical errors."""
    if error_logger:
        error_logger.critical("A critical error occurred: %s", error, exc_info=not isinstance(error, UmlDocletError))
    else:
        print(f"A critical error occurred: {error}", file=sys.stderr)
    return EXIT_FAILURE


async def main_async(argv: list[str] | None = None) -> int:
    """Execute main async entry point.

    Returns:
        Process exit status.

    """
    args = CLI().parse_args(argv)
    start_time = time.time()
    console_logger: logging.Logger | None = None
    error_logger: logging.Logger | None = None
    listener: SafeQueueListener | None = None

    try:
        config, console_logger, error_logger, listener = _setup_environment(args)
        await Orchestrator(config, console_logger, error_logger).run()
    except KeyboardInterrupt:
        return _handle_keyboard_interrupt(console_logger)
    except (UmlDocletError, OSError, ValueError, RuntimeError) as e:
        return _handle_critical_error(e, error_logger)
    finally:
        if listener:
            listener.stop()
        if console_logger:
            console_logger.debug("Total execution time: %.2f seconds", time.time() - start_time)
    return 0


def main() -> None:
    """Execute the main entry point."""
    try:
        sys.exit(asyncio.run(main_async()))
    except KeyboardInterrupt:
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
