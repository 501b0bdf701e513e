"""Logging configuration.

All modules log through ``logging.getLogger(__name__)``; this module wires the
root logger to a rich console handler and, optionally, a rotating log file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"


def configure_logging(
    level: Union[str, int, None] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name or number. Defaults to ``NEWSWIRE_LOG_LEVEL``
            from the environment, then INFO.
        log_file: Optional path of a rotating log file written alongside
            the console output.
    """
    if level is None:
        level = os.environ.get("NEWSWIRE_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
