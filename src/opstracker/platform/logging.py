"""
OpsTracker Structured Logging

Every event carries the app name, environment and tracker storage key, so
lines from several tracker deployments can share one log sink.
"""

import logging
import sys
from typing import Any, Callable, MutableMapping

import structlog

from opstracker.platform.config import Settings, settings as default_settings

EventDict = MutableMapping[str, Any]


def app_context_processor(app_settings: Settings) -> Callable[[Any, str, EventDict], EventDict]:
    """Processor stamping the deployment's identity onto each event."""
    context = {
        "app": app_settings.APP_NAME,
        "env": app_settings.APP_ENV,
        "storage_key": app_settings.STORAGE_KEY,
    }

    def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def build_renderer(app_settings: Settings) -> Callable[..., Any]:
    if app_settings.APP_ENV == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=app_settings.DEBUG)


def configure_logging(app_settings: Settings | None = None) -> None:
    """Configure structlog and stdlib logging from the given settings."""
    app_settings = app_settings or default_settings
    log_level = getattr(logging, app_settings.LOG_LEVEL.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            app_context_processor(app_settings),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            build_renderer(app_settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # SqlBlobStore and uvicorn log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)
