"""Structlog configuration helpers."""
from __future__ import annotations

import logging
from typing import Union

import structlog


def _level_number(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelName(level.upper())


def configure_structlog(log_level: Union[str, int] = "INFO", json_output: bool = True) -> None:
    """Route structlog through stdlib logging, dropping events below ``log_level``.

    ``json_output`` selects the JSON renderer; otherwise lines are rendered as
    key/value text for the stdlib formatter.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(log_level)),
        cache_logger_on_first_use=json_output,
    )
    logging.getLogger(__name__).info("structlog configured")
