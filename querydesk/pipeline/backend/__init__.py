"""
Backend command client
"""
from querydesk.pipeline.backend.client import (
    BackendClient,
    HttpBackendClient,
    CONNECT,
    ASK,
    ASK_FOR_SQL,
    QUERY,
)

__all__ = [
    "BackendClient",
    "HttpBackendClient",
    "CONNECT",
    "ASK",
    "ASK_FOR_SQL",
    "QUERY",
]
