# --- src/breadboard_core/log_config.py ---
import logging
import os
import sys
from typing import Optional, TextIO, Union

#: Environment variable consulted when no explicit level is passed.
LOG_LEVEL_ENV_VAR = "BREADBOARD_LOG_LEVEL"


def setup_logging(level: Optional[Union[int, str]] = None, stream: Optional[TextIO] = None):
    """
    Configures the root logger with a single console handler.

    The level defaults to the value of BREADBOARD_LOG_LEVEL, or INFO when unset.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    root_logger = logging.getLogger()

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.debug("Logging configured at level %s.", logging.getLevelName(level))
