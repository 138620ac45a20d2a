from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping

import structlog

from wild_oasis.config import LOG_LEVEL

Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]

NOISY_LOGGERS = ("sqlalchemy.engine", "alembic", "uvicorn.access")


def setup_logging(level: str = LOG_LEVEL) -> None:
    """
    Configure stdlib logging and structlog for the API and scripts.

    LOG_LEVEL=DEBUG renders colored console lines for local work. Any other
    level renders one JSON object per event, with tracebacks from
    logger.exception() serialized into the "exception" key.

    Every event carries the request_id bound by RequestIDMiddleware, when
    logged inside a request.
    """
    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s in %(name)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=level,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if level == "DEBUG":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
