"""
Opt-in logging setup for applications embedding zai-client.

The client logs through loguru; nothing is configured on import. Call
setup_logging() once at startup to get a stdout sink, optionally as JSON lines,
and to bridge the HTTP stack's standard-library loggers into loguru.
"""

import logging
import sys

from loguru import logger

HTTP_LOGGERS = ("httpx", "httpcore")

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forwards standard-library log records to loguru, keeping the caller's frame."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames inside the logging module itself
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def bridge_stdlib_loggers(names: tuple[str, ...] = HTTP_LOGGERS) -> None:
    """Route the named standard-library loggers through loguru only."""
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def setup_logging(
    level: str = "INFO",
    json_logs: bool = False,
    intercept: tuple[str, ...] = HTTP_LOGGERS,
) -> int:
    """
    Replace loguru's sinks with a single stdout sink.

    Args:
        level: Minimum level for the sink.
        json_logs: Emit one JSON object per line instead of colored text.
        intercept: Standard-library loggers to forward into loguru.

    Returns:
        The loguru handler id of the new sink.
    """
    logger.remove()

    if json_logs:
        handler_id = logger.add(sys.stdout, level=level, serialize=True)
    else:
        handler_id = logger.add(sys.stdout, format=_TEXT_FORMAT, level=level, colorize=True)

    bridge_stdlib_loggers(intercept)

    logger.debug(f"zai-client logging at {level} (json={json_logs})")
    return handler_id
