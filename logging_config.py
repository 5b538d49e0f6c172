"""Structured logging configuration for the metrics registry"""
import logging
import os
import sys
import structlog
from structlog.stdlib import LoggerFactory
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, StackInfoRenderer
from config import Config


def _shared_processors() -> list:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


class _DeferredLogger:
    """Logger that looks up the structlog configuration on every call.

    Until the host application configures structlog, events go through the
    stdlib logger of the same name and global structlog state is left alone.
    """

    def __init__(self, name: str, **context):
        self._name = name
        self._context = context

    def bind(self, **new_values) -> "_DeferredLogger":
        return _DeferredLogger(self._name, **{**self._context, **new_values})

    def _resolve(self) -> structlog.stdlib.BoundLogger:
        if structlog.is_configured():
            logger = structlog.get_logger(self._name)
        else:
            logger = structlog.wrap_logger(
                logging.getLogger(self._name),
                processors=_shared_processors() + [JSONRenderer()],
                wrapper_class=structlog.stdlib.BoundLogger,
            )
        return logger.bind(**self._context)

    def __getattr__(self, name: str):
        return getattr(self._resolve(), name)


def setup_structured_logging(config: Config) -> None:
    """Setup structured logging with JSON format for production and console for development"""

    processors = _shared_processors()

    # Use JSON renderer for production, console for development
    is_development = os.getenv("ENVIRONMENT", "production").lower() == "development"
    if is_development:
        processors.append(ConsoleRenderer())
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.log_level.upper())
    handlers = []

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    # File handler, only when a log file is configured
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(config.log_file))
        file_handler.setLevel(level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
        force=True
    )

    # Protobuf runtime chatter
    logging.getLogger('google.protobuf').setLevel(logging.WARNING)


def get_logger(name: str) -> _DeferredLogger:
    """Get a structured logger instance"""
    return _DeferredLogger(name)


def log_registration(logger: structlog.stdlib.BoundLogger, name: str, metric_type: str, label_count: int) -> None:
    """Log a metric registration with structured data"""
    logger.debug(
        "Registered metric",
        metric_name=name,
        metric_type=metric_type,
        static_label_count=label_count,
        event_type="metric_registration"
    )


def log_encode(logger: structlog.stdlib.BoundLogger, family_count: int, metric_count: int, encode_time: float) -> None:
    """Log a completed registry encode with structured data"""
    logger.debug(
        "Metric set encoded",
        family_count=family_count,
        metric_count=metric_count,
        encode_time_seconds=round(encode_time, 6),
        event_type="metric_encode"
    )
