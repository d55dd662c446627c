"""
Global logging setup: stdlib logging carries the records, structlog formats them.
"""
import logging

import structlog

from ..config import Config


def setup_logging(app_config: Config) -> None:
    """Configure stdlib logging and structlog from the logging section of the config.

    Safe to call more than once; later calls replace earlier handlers.
    """
    log_config = app_config.logging
    handler_kwargs = {"filename": str(log_config.file)} if log_config.file else {}

    logging.basicConfig(
        level=getattr(logging, log_config.level.upper(), logging.WARNING),
        format="%(message)s",
        force=True,
        **handler_kwargs,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False) if log_config.format.lower() == "console"
            else structlog.processors.JSONRenderer(sort_keys=True)
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.get_logger(__name__).debug("Logging configured.", logging_level=log_config.level, logging_format=log_config.format)
