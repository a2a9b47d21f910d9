# logger.py
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level=logging.INFO):  # type: ignore
    """
    Configures the root logger to log messages to stdout.

    Parameters:
    - level (int | str): Logging level (e.g., logging.DEBUG, "INFO").
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logger = logging.getLogger()  # Root logger
    logger.setLevel(level)

    # Check if handlers are already added to avoid duplication.
    # The handler has no level of its own, the root logger level applies.
    if not logger.handlers:
        sh = logging.StreamHandler(sys.stdout)
        sh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(sh)
