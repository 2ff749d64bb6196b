import logging
import sys
import structlog
import os
from opentelemetry.instrumentation.logging import LoggingInstrumentor

from core.settings import Settings


def get_log_level(settings: Settings | None = None):
    """Get log level from settings, then environment, or default to INFO"""
    if settings is not None:
        return settings.LOG_LEVEL.upper()
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_environment(settings: Settings | None = None):
    if settings is not None:
        return settings.ENVIRONMENT
    return os.getenv("ENVIRONMENT", "development")


def get_log_renderer(settings: Settings | None = None):
    """Get log renderer based on environment"""
    env = get_environment(settings)
    # Use JSON format for tests and production
    if env in ["test", "production"]:
        return structlog.processors.JSONRenderer()
    # Pretty printing for local development
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def configure_logging(settings: Settings | None = None):
    """
    Set up structlog + OTEL context injection.

    Replaces the root logger's handlers, so only the embedding application
    (or a test session) should call this; importing the client never does.
    """
    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.ExceptionPrettyPrinter(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            get_log_renderer(settings),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if get_environment(settings) == "test":
        # In test mode, write to stdout for easier capture
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]  # Replace any existing handlers
    root_logger.setLevel(get_log_level(settings))

    # urllib3 logs every connection at DEBUG; keep it out of our stream
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Initialize OpenTelemetry logging instrumentation AFTER configuring logging
    LoggingInstrumentor().instrument(set_logging_format=False)


# Business Event Log Names
class BusinessEvents:
    """Standard names for business event logs"""

    PAYPAL_REQUEST = "paypal.request"
    PAYPAL_SUCCESS = "paypal.success"
    PAYPAL_FAILURE = "paypal.failure"
    PAYPAL_TRANSPORT_ERROR = "paypal.transport_error"
