"""Loguru setup for the market data service.

Stdlib loggers (uvicorn, apscheduler) are routed into loguru so every
line shares one format. Store and job messages carry the currency pair
in ``record["extra"]["pair"]``; ``setup_logging`` can restrict output to
a subset of pairs when debugging a single market.
"""

import logging
import sys
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from loguru import logger

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru, keeping the caller location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def pair_filter(pairs: Iterable[str] | None) -> Callable[[dict[str, Any]], bool] | None:
    """Build a loguru filter passing records for ``pairs`` only.

    Records without a pair (startup, scheduler, HTTP access) always pass.
    An empty or missing selection disables filtering.
    """
    allowed = {p.upper() for p in pairs or ()}
    if not allowed:
        return None

    def _filter(record: dict[str, Any]) -> bool:
        pair = record["extra"].get("pair")
        return pair is None or str(pair).upper() in allowed

    return _filter


def setup_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    pairs: Iterable[str] | None = None,
    sink: TextIO | Callable[[Any], None] = sys.stderr,
) -> None:
    """Configure loguru as the sole logging handler.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output structured JSON logs.
        pairs: Pair keys whose messages are kept; None keeps every pair.
        sink: Destination for log output.
    """
    logger.remove()

    options: dict[str, Any] = {"level": log_level.upper(), "filter": pair_filter(pairs)}
    if json_output:
        logger.add(sink, serialize=True, **options)
    else:
        logger.add(sink, format=TEXT_FORMAT, colorize=sink is sys.stderr, **options)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for lib_logger in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(lib_logger).handlers = [InterceptHandler()]
    # Tick job runs every few seconds
    logging.getLogger("apscheduler.executors.default").setLevel(logging.WARNING)
