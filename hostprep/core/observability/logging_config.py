"""
Logging configuration — central setup for the CLI.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Console lines carry a severity tag: ``[INFO]``, ``[WARN]``, ``[ERR ]``.

Levels are resolved in precedence order:
    CLI flag  >  HOSTPREP_LOG_LEVEL env var  >  INFO (default)

Optional file output via HOSTPREP_LOG_FILE / HOSTPREP_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

import click

# ── Format strings ──────────────────────────────────────────────

_FMT_CONSOLE = "%(message)s"

# --debug: which module said it, and where
_FMT_DEBUG = "%(asctime)s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_TAGS = {
    logging.DEBUG: ("[DBG ]", "bright_black"),
    logging.INFO: ("[INFO]", "cyan"),
    logging.WARNING: ("[WARN]", "yellow"),
    logging.ERROR: ("[ERR ]", "red"),
    logging.CRITICAL: ("[ERR ]", "red"),
}


class SeverityFormatter(logging.Formatter):
    """Prefix each record with its severity tag, optionally coloured."""

    def __init__(self, fmt: str = _FMT_CONSOLE, datefmt: str | None = None, colour: bool = False):
        super().__init__(fmt, datefmt=datefmt)
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        tag, fg = _TAGS.get(record.levelno, (f"[{record.levelname}]", None))
        if self.colour and fg:
            tag = click.style(tag, fg=fg, bold=True)
        return f"{tag} {message}"


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
    show_origin: bool = False,
    colour: bool | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
        show_origin: Add timestamp, logger name and line to console lines.
        colour: Colour the severity tags. Defaults to whether stderr
            is a terminal.
    """
    numeric_level = _parse_level(level)
    if colour is None:
        colour = sys.stderr.isatty()

    # ── Console handler (stderr) ────────────────────────────────
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    if show_origin:
        console.setFormatter(SeverityFormatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG, colour=colour))
    else:
        console.setFormatter(SeverityFormatter(colour=colour))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric
