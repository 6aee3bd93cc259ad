"""
Logging utilities for GamePilot.

Entrypoints call configure_logging() once at startup; library modules only
ever do `logger = logging.getLogger(__name__)`.
"""
import inspect
import logging
import os
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

_logging_configured = False
_run_id: Optional[str] = None
_HANDLER_TAG = "_gp_handler"
_CONSOLE_FMT = '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s'
_CONSOLE_FMT_WITH_RUN_ID = '%(asctime)s | %(levelname)-5s | %(name)s | run_id=%(run_id)s | %(message)s'
_FILE_FMT = '%(asctime)s | %(levelname)-5s | %(name)s | %(funcName)s:%(lineno)d | run_id=%(run_id)s | %(message)s'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


class RunIdFilter(logging.Filter):
    """Inject run_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _run_id or "-"
        return True


def is_configured() -> bool:
    return _logging_configured


def _tagged(handler: logging.Handler, level: str, fmt: str, datefmt: str) -> logging.Handler:
    handler.setLevel(getattr(logging, level, logging.INFO))
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.addFilter(RunIdFilter())
    setattr(handler, _HANDLER_TAG, True)
    return handler


def configure_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    file_level: str = 'DEBUG',
    force: bool = False,
    run_id: Optional[str] = None,
    console: bool = True,
    show_run_id: bool = False,
) -> None:
    """
    Configure logging for the whole process.

    Subsequent calls are ignored unless force=True. Console output goes to
    stderr so that command output on stdout stays machine-readable.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to log file
        file_level: Log level for file output (default DEBUG)
        force: If True, reconfigure even if already configured
        run_id: Optional run identifier to inject into log records
        console: Whether to add a console handler
        show_run_id: Include run_id in console lines

    Environment variable overrides:
        LOG_LEVEL: Override the level parameter
        LOG_FILE: Override the log_file parameter
    """
    global _logging_configured, _run_id

    if run_id:
        _run_id = run_id

    if _logging_configured and not force:
        return

    level = os.getenv('LOG_LEVEL', level).upper()
    if log_file is None:
        log_file = os.getenv('LOG_FILE')

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)  # Filter at handler level

    # Only remove handlers we installed
    for handler in root.handlers[:]:
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()

    if console:
        console_fmt = _CONSOLE_FMT_WITH_RUN_ID if (show_run_id or level == 'DEBUG') else _CONSOLE_FMT
        root.addHandler(_tagged(logging.StreamHandler(sys.stderr), level, console_fmt, '%H:%M:%S'))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        root.addHandler(_tagged(file_handler, file_level.upper(), _FILE_FMT, '%Y-%m-%d %H:%M:%S'))

    _logging_configured = True

    logging.getLogger(__name__).debug(
        f"Logging configured: level={level}, file={log_file or 'none'}, run_id={_run_id or '-'}"
    )


@contextmanager
def stage_timer(stage_name: str, logger: Optional[logging.Logger] = None):
    """
    Time a pipeline stage.

    Logs the start at DEBUG and the completion with elapsed time at INFO.

    Usage:
        with stage_timer("Scoring"):
            ranked = score_library(games, ctx, engine)
        # Logs: "Scoring completed in 12ms"
    """
    if logger is None:
        # Caller's module logger (skip the contextmanager frame)
        frame = inspect.currentframe()
        caller = frame.f_back.f_back if frame and frame.f_back else None
        logger = logging.getLogger(caller.f_globals.get('__name__', __name__) if caller else __name__)

    logger.debug(f"{stage_name} starting...")
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if elapsed < 1:
            logger.info(f"{stage_name} completed in {elapsed*1000:.0f}ms")
        else:
            logger.info(f"{stage_name} completed in {elapsed:.1f}s")


def format_count(n: int, singular: str, plural: Optional[str] = None) -> str:
    """'1 game', '1,200 games'."""
    if plural is None:
        plural = singular + 's'
    return f"{n:,} {singular if n == 1 else plural}"


def truncate_list(items: List[Any], max_items: int = 3, format_fn: Callable[[Any], str] = str) -> str:
    """
    Format a list for logging, truncating if needed.

    Returns:
        Formatted string like "action, rpg, indie (+2 more)"
    """
    if not items:
        return "(none)"

    result = ', '.join(format_fn(item) for item in items[:max_items])
    if len(items) > max_items:
        result += f" (+{len(items) - max_items} more)"
    return result


def add_logging_args(parser) -> None:
    """
    Add the shared logging options to an argparse parser.

    Usage:
        parser = argparse.ArgumentParser()
        add_logging_args(parser)
        args = parser.parse_args()
        configure_logging(level=resolve_log_level(args), log_file=args.log_file)
    """
    group = parser.add_argument_group('logging')
    group.add_argument(
        '--log-level',
        choices=list(LOG_LEVELS),
        default=None,
        help='Set logging level (default: config value, else INFO)'
    )
    group.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging (shortcut for --log-level DEBUG)'
    )
    group.add_argument(
        '--quiet',
        action='store_true',
        help='Only warnings and errors (shortcut for --log-level WARNING)'
    )
    group.add_argument(
        '--log-file',
        type=str,
        metavar='PATH',
        help='Write logs to file'
    )


def resolve_log_level(args, default: str = 'INFO') -> str:
    """
    Resolve the log level from parsed arguments.

    Priority: --debug > --quiet > --log-level > default
    """
    if getattr(args, 'debug', False):
        return 'DEBUG'
    if getattr(args, 'quiet', False):
        return 'WARNING'
    return getattr(args, 'log_level', None) or default


class RunSummary:
    """
    Collect metrics during a run and log them as one block at the end.

    Usage:
        summary = RunSummary("Recommend")
        summary.add("games_loaded", 120)
        summary.add("records_skipped", 2)
        summary.log()
    """

    def __init__(self, title: str, logger: Optional[logging.Logger] = None):
        self.title = title
        self.logger = logger or logging.getLogger(__name__)
        self.metrics: Dict[str, Union[int, float, str]] = {}
        self.start_time = time.perf_counter()

    def add(self, key: str, value: Union[int, float, str]) -> None:
        self.metrics[key] = value

    def log(self, level: int = logging.INFO) -> None:
        elapsed = time.perf_counter() - self.start_time

        self.logger.log(level, "=" * 60)
        self.logger.log(level, f"{self.title.upper()} SUMMARY")
        for key, value in self.metrics.items():
            display_key = key.replace('_', ' ').title()
            if isinstance(value, float):
                self.logger.log(level, f"  {display_key}: {value:.2f}")
            else:
                self.logger.log(level, f"  {display_key}: {value}")
        self.logger.log(level, f"  Total Time: {elapsed:.2f}s")
        self.logger.log(level, "=" * 60)
