import logging

import structlog

from studytrack.config import settings


def configure_logging() -> None:
    """Configure structlog for application-wide logging.

    Initializes stdlib logging at the configured level and renders structlog
    events with ISO timestamps, as JSON by default or as colored console
    output when ``log_json`` is disabled.
    """
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


logger = structlog.get_logger()
