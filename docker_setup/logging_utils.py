from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default

_LEVEL_TAGS = {
    logging.DEBUG: ("DEBUG", "\033[0;36m"),
    logging.INFO: ("INFO", "\033[0;32m"),
    logging.WARNING: ("WARN", "\033[1;33m"),
    logging.ERROR: ("ERROR", "\033[0;31m"),
    logging.CRITICAL: ("ERROR", "\033[0;31m"),
}
_RESET = "\033[0m"


class TaggedFormatter(logging.Formatter):
    """Console format: ``[INFO] message``, coloured when writing to a TTY."""

    def __init__(self, *, color: bool) -> None:
        super().__init__(fmt="%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        tag, color = _LEVEL_TAGS.get(record.levelno, (record.levelname, ""))
        msg = super().format(record)
        if self.color and color:
            return f"{color}[{tag}]{_RESET} {msg}"
        return f"[{tag}] {msg}"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
    console_level: Optional[int] = None,
) -> str:
    """Configure logging.

    The file log receives everything at ``level`` (including every command
    run). If the requested directory is not writable, fall back to
    ./docker-setup.log and keep reporting the intended path.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_docker_setup_configured", False):
        return getattr(logger, "_docker_setup_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        fallback = str(Path.cwd() / "docker-setup.log")
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    file_handler.setLevel(level)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(TaggedFormatter(color=sys.stderr.isatty()))
        console.setLevel(console_level if console_level is not None else level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_docker_setup_configured", True)
    setattr(logger, "_docker_setup_handlers", handlers)
    setattr(logger, "_docker_setup_log_path", chosen_path)

    logging.getLogger(__name__).debug("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path


def reset_logging() -> None:
    """Drop handlers installed by configure_logging()."""

    logger = logging.getLogger()
    for h in getattr(logger, "_docker_setup_handlers", []):
        logger.removeHandler(h)
        h.close()
    for attr in ("_docker_setup_configured", "_docker_setup_log_path", "_docker_setup_handlers"):
        if hasattr(logger, attr):
            delattr(logger, attr)
