#!/usr/bin/env python3
import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import Config
from .ui.highlighter import create_error_console

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    logger = logging.getLogger("xsh")
    logger.setLevel(logging.DEBUG if verbose else Config.get_log_level())
    logger.propagate = False

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    log_file = log_file or Config.LOG_FILE
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        file_handler = None

    if file_handler is not None:
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if verbose:
        logger.addHandler(
            RichHandler(
                console=create_error_console(),
                show_path=False,
                rich_tracebacks=True,
                markup=False,
            )
        )

    return logger
