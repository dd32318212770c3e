import os
import logging

from rich.logging import RichHandler

__all__ = 'logger', 'setup_logging'

logger = logging.getLogger("safeseq")


def setup_logging(level: int | str = logging.WARNING, color: bool = True) -> logging.Handler:
    """
    Configure the safeseq logger. Only the CLI calls this, the library never configures
    logging on import.

    :param level: Log level name or number
    :param color: Use rich for colored output, SAFESEQ_NO_COLOR_LOG=1 turns it off anyway
    :return: The installed handler
    """
    if os.environ.get("SAFESEQ_NO_COLOR_LOG", "") == "1":
        color = False

    # Remove existing handlers before adding new one
    if logger.hasHandlers():
        logger.handlers.clear()

    if color:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            omit_repeated_times=False,
            markup=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%Y-%m-%d %H:%M:%S]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(message)s",
            datefmt="[%Y-%m-%d %H:%M:%S%z]")
        )

    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.addHandler(handler)
    return handler
