from backend_common.logging import configure_logging as _configure_logging
from sentry_sdk.integrations.starlette import StarletteIntegration


def configure_logging() -> None:
    _configure_logging("fitness-service", extra_sentry_integrations=[StarletteIntegration()])
