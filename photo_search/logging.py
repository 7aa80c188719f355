"""Structured logging helpers."""

from __future__ import annotations

import logging

import structlog

COMPONENT = "photo_search"


def _add_component(_logger, _method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("component", COMPONENT)
    return event_dict


def configure_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    structlog.configure(
        processors=[
            _add_component,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger(COMPONENT)

__all__ = ["COMPONENT", "configure_logging", "logger"]
