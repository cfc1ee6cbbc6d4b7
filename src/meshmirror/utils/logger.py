"""
Logging setup for meshmirror, built on loguru.

Every module obtains its logger with::

    from meshmirror.utils.logger import get_logger

    logger = get_logger(__name__)

and the entry points call :func:`configure_logging` once with the configured
:class:`~meshmirror.models.enums.LogLevel`.
"""

import sys
import traceback

from loguru import logger as _logger

from meshmirror.models.enums import LogLevel


# =============================================================================
# Formats
# =============================================================================

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

FULL_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_LEVEL_MAP = {
    LogLevel.FULL: "TRACE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARNING",
}

# Records logged before any sink binds a name still need the key
_logger.configure(extra={"name": "meshmirror"})


def get_logger(name: str):
    """Return a loguru logger bound to the given module name."""
    return _logger.bind(name=name)


def configure_logging(level: LogLevel = LogLevel.INFO, log_file: str = "") -> None:
    """
    Install the stderr sink (and an optional file sink).

    Args:
        level: Verbosity level.
        log_file: Optional path; when set, logs are also written there
            with rotation.
    """
    level = LogLevel(level)
    fmt = FULL_LOG_FORMAT if level == LogLevel.FULL else LOG_FORMAT
    loguru_level = _LEVEL_MAP[level]

    _logger.remove()
    _logger.add(
        sys.stderr,
        level=loguru_level,
        format=fmt,
        backtrace=level == LogLevel.FULL,
        diagnose=level == LogLevel.FULL,
    )

    if log_file:
        _logger.add(
            log_file,
            level=loguru_level,
            format=fmt,
            rotation="10 MB",
            retention=5,
            colorize=False,
        )


def format_traceback(exc: BaseException) -> str:
    """Render an exception with its traceback as a single string."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
