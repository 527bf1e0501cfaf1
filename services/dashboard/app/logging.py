from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(log_level: str, *, stream: TextIO | None = None) -> None:
    """
    JSON log lines through the stdlib root handler.

    The HTTP service logs to stdout; the seed CLI passes stderr so its stdout stays a single JSON
    document. `seed_run_id` (bound per run via contextvars) is merged into every event.
    """
    level = logging.getLevelName(log_level.upper())
    logging.basicConfig(format="%(message)s", stream=stream or sys.stdout, level=level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger("dashboard")
