from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "/var/log/bootstrap-installer.log"

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
NC = "\033[0m"

_LEVEL_TAGS = {
    logging.DEBUG: "[DEBUG]",
    logging.INFO: f"{GREEN}[INFO]{NC}",
    logging.WARNING: f"{YELLOW}[WARN]{NC}",
    logging.ERROR: f"{RED}[ERROR]{NC}",
    logging.CRITICAL: f"{RED}[ERROR]{NC}",
}


class ConsoleFormatter(logging.Formatter):
    """Short colored `[LEVEL] message` lines for the terminal."""

    def format(self, record: logging.LogRecord) -> str:
        tag = _LEVEL_TAGS.get(record.levelno, f"[{record.levelname}]")
        msg = f"{tag} {record.getMessage()}"
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        return msg


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure root logging: a timestamped file log plus colored console output.

    If the requested log file cannot be opened (no write access to /var/log
    in a live environment), a file in the working directory is used instead.
    If that fails too, logging goes to the console only.

    Returns the actual file path being used, or None without a log file.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Calling twice only adjusts the level.
    if getattr(logger, "_bootstrap_configured", False):
        for h in logger.handlers:
            if getattr(h, "_bootstrap_console", False):
                h.setLevel(level)
        return getattr(logger, "_bootstrap_log_path", log_path)

    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    chosen_path: Optional[str] = None
    for candidate in (log_path, str(Path.cwd() / "bootstrap-installer.log")):
        try:
            Path(os.path.dirname(candidate) or ".").mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(candidate)
        except OSError:
            continue
        file_handler.setFormatter(fmt)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)
        chosen_path = candidate
        break

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(ConsoleFormatter())
        console.setLevel(level)
        setattr(console, "_bootstrap_console", True)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_bootstrap_configured", True)
    setattr(logger, "_bootstrap_log_path", chosen_path)

    if chosen_path is None:
        logging.getLogger(__name__).warning("Cannot open a log file (tried %s); logging to console only", log_path)
    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
