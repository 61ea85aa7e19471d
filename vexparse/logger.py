"""
vexparse logging.

The package logs through the "vexparse" logger; library code never installs
handlers. Applications (and the `python -m vexparse` demo) call setup_logging()
to route records to a rich console handler.

Environment
- VEXPARSE_LOG_LEVEL: overrides the level passed to setup_logging().
"""
import logging
import os

from rich.logging import RichHandler

logger = logging.getLogger("vexparse")


def setup_logging(level=logging.WARNING):
    """
    install a RichHandler on the "vexparse" logger (idempotent).

    the level can be a logging constant or a level name; VEXPARSE_LOG_LEVEL wins
    over the argument when set.
    """
    level = os.getenv("VEXPARSE_LOG_LEVEL") or level
    if isinstance(level, str):
        if not isinstance(number := logging.getLevelName(level.upper()), int):
            raise ValueError(f"invalid log level: {level!r}")
        level = number

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    logger.debug("Logging initialized at level %s.", logging.getLevelName(level))
    return logger


__all__ = (
    "logger",
    "setup_logging",
)
