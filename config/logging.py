"""
Structured logging setup.

Called once from the application entry point.
"""

import logging

import structlog

from config.settings import settings


def configure_logging(force: bool = False) -> None:
    """
    Configure stdlib logging and structlog.

    JSON output in production, console output everywhere else.
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        force=force,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if settings.is_production
                else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
