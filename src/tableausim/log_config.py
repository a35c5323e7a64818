# --- src/tableausim/log_config.py ---
import logging
import sys
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"

# Third-party loggers that are chatty at DEBUG and say nothing about the circuit.
_QUIET_LOGGERS = ("pint",)


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None):
    """
    Routes all log records to a single stream handler (stdout by default).

    `level` may be a `logging` constant or a level name such as "debug".
    Calling it again replaces the previous handler, so the CLI can switch levels
    after reading its configuration.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.debug(f"Logging configured at level {logging.getLevelName(level)}.")
