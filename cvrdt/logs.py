"""
structlog setup for applications embedding the library.

The library itself only calls structlog.get_logger(); nothing is configured
on import.
"""
import logging

import structlog


def configure_logging(level="INFO"):
    logging.basicConfig(format="%(message)s", level=getattr(logging, str(level).upper(), logging.INFO))

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    return structlog.get_logger()
