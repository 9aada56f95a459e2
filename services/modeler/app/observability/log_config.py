"""structlog configuration for the modeler service."""
from __future__ import annotations

import logging

import structlog

from ..config import ModelerSettings


def configure_logging(settings: ModelerSettings) -> None:
    level = logging.getLevelName(settings.observability.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.observability.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


__all__ = ["configure_logging"]
