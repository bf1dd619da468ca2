"""Logger setup using RichHandler for console output and a QueueHandler for non-blocking file IO.

Features:

1.  **Rich Console Output:** ``rich.logging.RichHandler`` on one shared console for colour and markup.
2.  **Two Loggers:** ``console_logger`` for progress, ``error_logger`` for warnings and failures (``get_loggers``).
3.  **Non-Blocking File Logging:** an optional log file is fed through ``QueueHandler``/``QueueListener``.
4.  **Path Aliases:** file paths in file logs are shortened to ``$DOCS`` or ``~`` (``shorten_path``).
5.  **Fallback:** logger setup never raises; on failure basic stream loggers are returned.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Golden Rule of Logging
# ---------------------------------------------------------------------------
# All runtime and debugging information **must** go through a configured
# ``logging.Logger`` instance. ``print()`` is reserved for failures of the
# logging setup itself.
# ---------------------------------------------------------------------------
import logging
import os
import queue
import sys
import traceback
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from umldoclet.core.models.config_models import AppConfig

__all__ = [
    "LEVEL_ABBREV",
    "CompactFormatter",
    "LogFormat",
    "SafeQueueListener",
    "create_console_logger",
    "create_fallback_loggers",
    "ensure_directory",
    "get_log_levels_from_config",
    "get_loggers",
    "get_shared_console",
    "setup_queue_logging",
    "shorten_path",
]

CONSOLE_LOGGER_NAME = "umldoclet.console"
ERROR_LOGGER_NAME = "umldoclet.error"

# Module-level shared console container (avoids global statement)
_console_holder: dict[str, Console] = {}


def get_shared_console() -> Console:
    """Get or create the shared Rich console instance.

    All Rich output should use this single Console instance to prevent output interleaving.

    Returns:
        The shared Console instance.

    """
    if "console" not in _console_holder:
        _console_holder["console"] = Console(stderr=True)
    return _console_holder["console"]


class SafeQueueListener(QueueListener):
    """A QueueListener wrapper that safely handles stop() calls."""

    def stop(self) -> None:
        """Stop the listener thread safely, handling cases where _thread is None."""
        try:
            if getattr(self, "_thread", None) is not None:
                super().stop()
        except (AttributeError, RuntimeError, TypeError) as e:
            print(f"Warning: Error stopping QueueListener: {e}", file=sys.stderr)


# Level abbreviations used by CompactFormatter
LEVEL_ABBREV = {
    "DEBUG": "D",
    "INFO": "I",
    "WARNING": "W",
    "ERROR": "E",
    "CRITICAL": "C",
}


class LogFormat:
    """Rich markup helpers for consistent log formatting.

    Example:
        from umldoclet.core.logger import LogFormat as LF
        logger.info("Wrote %s (%s types)", LF.file("package.puml"), LF.number(12))
    """

    @staticmethod
    def file(name: str | os.PathLike[str]) -> str:
        """Format filename with cyan highlighting."""
        return f"[cyan]{name}[/cyan]"

    @staticmethod
    def number(value: float) -> str:
        """Format numbers with bright white highlighting."""
        return f"[bright_white]{value}[/bright_white]"

    @staticmethod
    def success(text: str) -> str:
        """Format success status with green highlighting."""
        return f"[green]{text}[/green]"

    @staticmethod
    def duration(seconds: float) -> str:
        """Format duration with dim styling."""
        return f"[dim]{seconds:.1f}s[/dim]"


def ensure_directory(path: str, error_logger: logging.Logger | None = None) -> None:
    """Ensure that the given directory path exists, creating it if necessary."""
    try:
        if path and not Path(path).exists():
            Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        if error_logger:
            error_logger.exception("Error creating directory %s", path)
        else:
            print(f"ERROR: Error creating directory {path}: {e}", file=sys.stderr)


def shorten_path(path: str, config: AppConfig | None = None) -> str:
    """Return a shortened, human-friendly representation of *path*.

    Priority of replacements (first match wins):
    1. The documentation destination directory → ``$DOCS``.
    2. Current user's home directory → ``~``.
    3. Any other path is returned normalized.

    The function never raises.
    """
    if not path:
        return path or ""

    norm_path = os.path.normpath(path)

    if config is not None:
        docs_dir = os.path.normpath(os.path.abspath(config.destination_directory))
        if norm_path == docs_dir or norm_path.startswith(docs_dir + os.sep):
            return "$DOCS" + norm_path[len(docs_dir) :]

    try:
        home_dir = str(Path.home())
    except (OSError, RuntimeError, KeyError):
        return norm_path
    if norm_path == home_dir:
        return "~"
    if norm_path.startswith(home_dir + os.sep):
        return "~" + norm_path[len(home_dir) :]
    return norm_path


class CompactFormatter(logging.Formatter):
    """Log formatter for compact file output: level abbreviation and shortened paths."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str = "%H:%M:%S",
        style: Literal["%", "{", "$"] = "%",
        *,
        config: AppConfig | None = None,
    ) -> None:
        """Initialize the CompactFormatter."""
        default_fmt = "%(asctime)s %(levelname)s [%(name)s] %(short_pathname)s:%(lineno)d - %(message)s"
        super().__init__(fmt if fmt is not None else default_fmt, datefmt, style)
        self.config = config

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with an abbreviated level and a shortened source path."""
        original_levelname = record.levelname
        record.short_pathname = shorten_path(getattr(record, "pathname", ""), self.config)
        record.levelname = LEVEL_ABBREV.get(original_levelname, original_levelname[:1])
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
            del record.short_pathname


def get_log_levels_from_config(config: AppConfig) -> dict[str, int]:
    """Extract log levels from config for the console and the log file.

    Args:
        config: Typed application configuration.

    Returns:
        Dictionary mapping ``"console"`` and ``"main_file"`` to logging level constants.

    """
    levels_config = config.logging.levels

    def get_level_from_config(level_name: str | None, default_level: int = logging.INFO) -> int:
        if not level_name:
            return default_level
        level = logging.getLevelName(str(level_name).upper())
        return level if isinstance(level, int) else default_level

    return {
        "console": get_level_from_config(levels_config.console),
        "main_file": get_level_from_config(levels_config.main_file),
    }


def _has_handler(logger: logging.Logger, handler_type: type[logging.Handler]) -> bool:
    # Handlers attached by others (test log capture, embedding apps) do not count
    return any(isinstance(handler, handler_type) for handler in logger.handlers)


def _rich_handler(level: int) -> RichHandler:
    handler = RichHandler(
        level=level,
        console=get_shared_console(),
        show_path=False,
        enable_link_path=False,
        log_time_format="%H:%M:%S",
        markup=True,
    )
    handler.setLevel(level)
    return handler


def create_console_logger(levels: dict[str, int]) -> logging.Logger:
    """Create and configure the console logger with RichHandler.

    Only adds a RichHandler if the logger does not have one yet.

    Args:
        levels: Dictionary with "console" key containing logging level constant.

    Returns:
        Configured console logger instance with RichHandler attached.

    """
    console_logger = logging.getLogger(CONSOLE_LOGGER_NAME)
    if not _has_handler(console_logger, RichHandler):
        console_logger.addHandler(_rich_handler(levels["console"]))
        console_logger.setLevel(levels["console"])
        console_logger.propagate = False
    return console_logger


def setup_queue_logging(config: AppConfig, levels: dict[str, int], log_file: str | None) -> tuple[logging.Logger, SafeQueueListener | None]:
    """Create the error logger: warnings on the console, everything at file level through a queue.

    Args:
        config: Typed application configuration.
        levels: Levels from ``get_log_levels_from_config``.
        log_file: Optional path of the log file.

    Returns:
        Tuple of (error_logger, listener). Listener is ``None`` when no log file is configured.

    """
    error_logger = logging.getLogger(ERROR_LOGGER_NAME)
    if _has_handler(error_logger, RichHandler):
        return error_logger, None

    error_logger.addHandler(_rich_handler(logging.WARNING))
    error_logger.propagate = False
    error_logger.setLevel(min(levels["main_file"], logging.WARNING))

    if not log_file:
        return error_logger, None

    ensure_directory(str(Path(log_file).parent))
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(CompactFormatter(datefmt="%Y-%m-%d %H:%M:%S", config=config))
    file_handler.setLevel(levels["main_file"])

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    listener = SafeQueueListener(log_queue, file_handler, respect_handler_level=True)
    listener.start()

    queue_handler = QueueHandler(log_queue)
    error_logger.addHandler(queue_handler)
    logging.getLogger(CONSOLE_LOGGER_NAME).addHandler(queue_handler)
    logging.getLogger("config").addHandler(queue_handler)
    return error_logger, listener


def get_loggers(config: AppConfig) -> tuple[logging.Logger, logging.Logger, SafeQueueListener | None]:
    """Create and return the console and error loggers.

    Note:
        This function never raises exceptions. On setup failure, it returns
        fallback loggers with basic StreamHandler configuration.

    Args:
        config: Typed application configuration.

    Returns:
        Tuple of (console_logger, error_logger, listener). Listener is ``None`` without a log file or on failure.

    """
    try:
        levels = get_log_levels_from_config(config)
        console_logger = create_console_logger(levels)
        error_logger, listener = setup_queue_logging(config, levels, config.logging.main_log_file)
    except (ImportError, OSError, ValueError, AttributeError, TypeError) as e:
        return create_fallback_loggers(e)

    console_logger.debug("Logging setup with RichHandler complete.")
    return console_logger, error_logger, listener


def create_fallback_loggers(e: Exception) -> tuple[logging.Logger, logging.Logger, None]:
    """Create fallback loggers when main logger setup fails.

    Args:
        e: The exception that caused main logger setup to fail.

    Returns:
        Tuple of (console_logger, error_logger, None).

    """
    print(f"FATAL ERROR: Failed to configure logging with RichHandler: {e}", file=sys.stderr)
    traceback.print_exc(file=sys.stderr)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    logging.critical("Fallback basic logging configured due to error: %s", e)

    console_fallback = logging.getLogger("console_fallback")
    error_fallback = logging.getLogger("error_fallback")
    if not console_fallback.handlers:
        console_fallback.addHandler(logging.StreamHandler(sys.stdout))
    if not error_fallback.handlers:
        error_fallback.addHandler(logging.StreamHandler(sys.stderr))
    return console_fallback, error_fallback, None
