import structlog
from fastapi import Request

from .store import DocumentStore

logger = structlog.get_logger(__name__)


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


async def log_api_request(request: Request) -> None:
    logger.debug(
        "api_auth_request",
        method=request.method,
        path=request.url.path,
        query=dict(request.query_params),
    )
