import logging
import sys

import structlog

from app.core.config import Settings
from app.core.sanitizer import PII_FIELDS, mask_value, redact_pii


def _redact_structlog(_, __, event_dict):
    for key, value in list(event_dict.items()):
        if key in PII_FIELDS:
            event_dict[key] = mask_value(value)
        elif isinstance(value, str):
            event_dict[key] = redact_pii(value)
    return event_dict


def setup_logging(settings: Settings):
    """Configure structlog JSON logging on top of the stdlib root logger."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        _redact_structlog,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=[structlog.stdlib.ExtraAdder()] + shared_processors,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    logging.getLogger("multipart").setLevel(logging.WARNING)

    logger = structlog.get_logger(__name__)
    logger.info("logging_configured", level=settings.LOG_LEVEL, pii_redaction=True)
    return logger
