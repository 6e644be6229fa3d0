"""
Backend command client
One request/response round trip per command, no streaming
"""
import httpx
import logging
from typing import Any, Optional, Protocol
from querydesk.core.config import settings

logger = logging.getLogger(__name__)

# Commands understood by the backend executor
CONNECT = "connect"
ASK = "ask"
ASK_FOR_SQL = "ask_for_sql"
QUERY = "query"

COMMANDS = (CONNECT, ASK, ASK_FOR_SQL, QUERY)


class BackendClient(Protocol):
    """Narrow command-invocation contract the orchestrator depends on"""

    async def invoke(self, command: str, **arguments: Any) -> str:
        """Run `command` with keyword arguments, return the raw response text"""
        ...


class HttpBackendClient:
    """
    Invokes backend commands over HTTP

    POST {base_url}/{command} with the arguments as a JSON object.
    A non-2xx answer raises httpx.HTTPStatusError; the body is expected to
    be the backend's structured error object.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.BACKEND_URL).rstrip("/")
        self.transport = transport

    async def invoke(self, command: str, **arguments: Any) -> str:
        if command not in COMMANDS:
            raise ValueError(f"Unknown backend command: {command}")

        url = f"{self.base_url}/{command}"

        # No timeout here: long inference runs are the backend's business
        async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
            response = await client.post(url, json=arguments)
            if response.is_error:
                logger.warning(f"[{command}] backend answered {response.status_code}")
            response.raise_for_status()
            return response.text
