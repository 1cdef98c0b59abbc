# templateview/logging_setup.py
import logging
import sys
from typing import Optional, TextIO
import structlog

LOGGER_NAME = "templateview"

def configure_logging(log_level_str: str = "warning", force_json_logs: bool = False,
                      stream: Optional[TextIO] = None):
    """
    Routes templateview's structlog events through the stdlib logger named
    ``templateview``. Events go to stream (stderr when omitted), never to the
    text a template renders.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)

    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=shared_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    target = stream if stream is not None else sys.stderr
    if force_json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=getattr(target, "isatty", lambda: False)())

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[structlog.stdlib.add_log_level],
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    structlog.get_logger(__name__).info("logging_configured", level=log_level_str, json=force_json_logs)
