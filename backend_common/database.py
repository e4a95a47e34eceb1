import re
from typing import Any
from urllib.parse import unquote, urlsplit

from pymongo import AsyncMongoClient

_CREDENTIALS_RE = re.compile(r"//.*@")


def redact_mongo_uri(uri: str) -> str:
    """Hide the ``user:password@`` part of a connection string for logging."""
    return _CREDENTIALS_RE.sub("//***:***@", uri)


def database_name_from_uri(uri: str, default: str) -> str:
    path = urlsplit(uri).path.lstrip("/")
    return unquote(path) if path else default


def create_mongo_client(
    uri: str,
    *,
    server_selection_timeout_ms: int = 5000,
    app_name: str | None = None,
    **client_kwargs: Any,
) -> AsyncMongoClient:
    kwargs: dict[str, Any] = {"serverSelectionTimeoutMS": server_selection_timeout_ms}
    if app_name:
        kwargs["appname"] = app_name
    kwargs.update(client_kwargs)
    return AsyncMongoClient(uri, **kwargs)
