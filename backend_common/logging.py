import logging
import os
import sys
from collections.abc import Iterable

import sentry_sdk
import structlog
from asgi_correlation_id.context import correlation_id
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

DEV_ENVIRONMENTS = {"local", "dev", "development"}
REDACTED_FIELDS = frozenset({"password", "headers", "authorization", "cookie"})


def _static_fields(**fields):
    def processor(logger, method_name, event_dict):
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _add_correlation_id(logger, method_name, event_dict):
    cid = correlation_id.get(None)
    if cid is not None:
        event_dict["correlation_id"] = cid
        # no-op unless Sentry was initialised
        sentry_sdk.set_tag("correlation_id", cid)
    return event_dict


def _redact_sensitive_fields(logger, method_name, event_dict):
    for key in REDACTED_FIELDS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def build_processors(service_name: str, app_env: str) -> list[Processor]:
    """Processors shared by every service, without the final renderer."""
    return [
        merge_contextvars,
        _static_fields(service=service_name, env=app_env),
        _add_correlation_id,
        _redact_sensitive_fields,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def init_sentry(service_name: str, app_env: str, extra_integrations: Iterable[object] | None = None) -> bool:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return False

    integrations = [FastApiIntegration(), *(extra_integrations or ())]
    integrations.append(LoggingIntegration(level=logging.INFO, event_level=logging.ERROR))

    sentry_sdk.init(
        dsn=dsn,
        environment=app_env,
        integrations=integrations,
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0")),
        send_default_pii=False,
    )
    sentry_sdk.set_tag("service", service_name)
    return True


def configure_logging(default_service_name: str, extra_sentry_integrations: Iterable[object] | None = None) -> None:
    """Route stdlib logging and structlog to stdout.

    ``LOG_LEVEL``, ``SERVICE_NAME`` and ``APP_ENV`` are read from the
    environment; development environments get the console renderer, every
    other environment gets one JSON object per line.
    """
    service_name = os.getenv("SERVICE_NAME", default_service_name)
    app_env = os.getenv("APP_ENV", "development")
    log_level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    init_sentry(service_name, app_env, extra_sentry_integrations)

    if app_env in DEV_ENVIRONMENTS:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)

    structlog.configure(
        processors=[*build_processors(service_name, app_env), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
