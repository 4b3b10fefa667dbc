"""
Logging configuration — one setup call per process.

Called by the CLI group callback in main.py.  Modules only ever do
``logger = logging.getLogger(__name__)`` and inherit this config.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  RGEN_LOG_LEVEL  >  WARNING

Batch runs spawn one interpreter per resource.  ``generate_all`` sets
RGEN_LOG_TAG to the resource name in each child's environment; the tag
prefixes every record, so console output and a shared RGEN_LOG_FILE
show which resource a line belongs to.
"""

from __future__ import annotations

import logging
import sys

TAG_ENV = "RGEN_LOG_TAG"

# ── Format strings ──────────────────────────────────────────────

# WARNING and above: the message is all the user needs
_FMT_MINIMAL = "%(message)s"

# INFO: which component said it, and when
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG: file:line for tracing the extractor and merge engine
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"

# Log file: full record plus the pid, since batch children append to one file
_FMT_FILE = "%(asctime)s %(process)d %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class _TagFilter(logging.Filter):
    """Prefix each message with ``[tag] ``."""

    def __init__(self, tag: str) -> None:
        super().__init__()
        self.prefix = f"[{tag}] "

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "_rgen_tagged", False):
            record.msg = self.prefix + str(record.msg)
            record._rgen_tagged = True
        return True


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    tag: str | None = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the log file; defaults to ``level``.
        tag: Label put in front of every message (a batch child's resource).
    """
    numeric_level = _parse_level(level)
    file_level = _parse_level(log_file_level) if log_file_level else numeric_level

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(_console_formatter(numeric_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        handlers.append(fh)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        if tag:
            handler.addFilter(_TagFilter(tag))
        root.addHandler(handler)

    root.setLevel(min(numeric_level, file_level) if log_file else numeric_level)


def _console_formatter(numeric_level: int) -> logging.Formatter:
    if numeric_level <= logging.DEBUG:
        return logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_CONSOLE)
    if numeric_level <= logging.INFO:
        return logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_CONSOLE)
    return logging.Formatter(_FMT_MINIMAL)


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level from CLI flags, falling back to the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
