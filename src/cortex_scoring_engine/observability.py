"""Structured logging for the CORTEX scoring engine.

Modules obtain a logger with ``get_logger(__name__)`` and log an event
message followed by keyword context, e.g.::

    logger.info("Assessment completed", assessment_id=..., gate_count=3)

``configure_logging`` is called once by the host process. Until then, and
when the host has not configured structlog itself, ``ensure_default_logging``
filters events below INFO so per-component debug events stay quiet.
"""

import logging

import structlog

from cortex_scoring_engine.settings import Settings


def ensure_default_logging() -> None:
    """Filter below INFO unless structlog has already been configured."""
    if structlog.is_configured():
        return
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger bound to the given module name."""
    return structlog.get_logger(name)


def configure_logging(settings: Settings) -> None:
    """Configure structlog processors and level from service settings.

    Args:
        settings: Service settings; ``log_level`` and ``log_json`` are read.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    structlog.get_logger(__name__).info(
        "Logging configured",
        service_name=settings.service_name,
        log_level=settings.log_level,
        log_json=settings.log_json,
    )


ensure_default_logging()
