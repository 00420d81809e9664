from __future__ import annotations

import logging
from typing import Any, Optional

import structlog

_CONFIGURED = False


def configure(level: str = "WARNING", *, json_format: bool = False, force: bool = False) -> None:
    """
    Configure structlog + stdlib logging once. Output goes to stderr.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=numeric_level, format="%(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(numeric_level)

    processors = [
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _CONFIGURED = True


def get_logger(name: Optional[str] = None, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    if not _CONFIGURED:
        configure()
    logger = structlog.get_logger(name) if name else structlog.get_logger()
    if initial_values:
        return logger.bind(**initial_values)
    return logger
