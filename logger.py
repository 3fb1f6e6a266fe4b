import logging
import sys
from pathlib import Path

LOG_NAME = "netform_wizard"
# first writable directory wins
LOG_DIRS = (Path("/var/log"), Path("/tmp"))
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _file_handler() -> logging.Handler:
    for directory in LOG_DIRS:
        try:
            return logging.FileHandler(directory / f"{LOG_NAME}.log")
        except OSError:
            continue
    return logging.NullHandler()


def setup_logger() -> logging.Logger:
    logger = logging.getLogger(LOG_NAME)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)
    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")

    fh = _file_handler()
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)

    # the TUI owns the terminal; only problems go to stderr
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(logging.WARNING)
    sh.setFormatter(fmt)

    logger.addHandler(fh)
    logger.addHandler(sh)
    return logger

log = setup_logger()
