"""
Logging for the lorenzbeat CLI.

`render` without `--out` prints the rendered program on stdout, so every log
record goes to stderr and the program can be piped straight into a pattern
engine. Records carry the active command (render, simulate, plot ...) so
pipeline stages logged from library code are attributed to the command that
ran them.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Optional

# Map string levels to logging constants
_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# Context variable so pipeline stages inherit the active command name
_current_command: ContextVar[str] = ContextVar("lorenzbeat_current_command", default="cli")


class _CommandFilter(logging.Filter):
    """Ensure every log record has a command label for prefix formatting."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        command = getattr(record, "command", None) or _current_command.get()
        record.command = command
        return True


def setup_logging(level: str = "WARNING") -> None:
    """
    Attach the lorenzbeat stderr handler once and set the root level.

    The handler is tagged so repeated CLI invocations in one process (tests,
    `CliRunner`) reuse it instead of stacking duplicates.
    """
    if isinstance(level, str):
        numeric_level = _LEVELS.get(level.lower(), logging.WARNING)
    else:
        numeric_level = int(level)
    root = logging.getLogger()
    if not any(getattr(h, "_lorenzbeat", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(command)s] %(levelname)s: %(message)s"))
        handler.addFilter(_CommandFilter())
        handler._lorenzbeat = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(numeric_level)
    # `plot` imports matplotlib, whose font manager floods DEBUG output
    logging.getLogger("matplotlib").setLevel(max(numeric_level, logging.INFO))
    logging.captureWarnings(True)


def set_command_context(command: str) -> None:
    """Label pipeline log records with the CLI command that is running."""
    _current_command.set(command)


def resolve_log_level(verbose: bool, debug: bool) -> str:
    """Map the global `--verbose` / `--debug` flags to a level name."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return "WARNING"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Module logger; pipeline stages log at DEBUG, run summaries at INFO."""
    return logging.getLogger(name if name is not None else __name__)
