"""
Service for query orchestration
Turns user intents into backend commands and records their outcomes
"""
import uuid
import logging
from typing import Any, Optional

from querydesk.core.errors import (
    BackendInvocationError,
    NoConnection,
    NoModel,
    QueryDeskError,
    RequestInFlight,
    StaleResponse,
)
from querydesk.dtos import Profile, ResultEntry
from querydesk.pipeline.backend import BackendClient, CONNECT, ASK, ASK_FOR_SQL, QUERY
from querydesk.pipeline.sql import ensure_read_only
from querydesk.services.config_store import ConfigStore
from querydesk.services.result_history import ResultHistory

logger = logging.getLogger(__name__)


class QueryOrchestrator:
    """
    Orchestrates connect / ask / ask_for_sql / query against the backend

    Reads the active profile from ConfigStore and never changes it, except
    for set_active after a successful connect. Only one ask/ask_for_sql/query
    may be outstanding: each one holds a request token, and a response whose
    token is no longer current is discarded instead of reaching history.
    """

    def __init__(
        self,
        store: ConfigStore,
        backend: BackendClient,
        history: Optional[ResultHistory] = None
    ):
        self.store = store
        self.backend = backend
        self.history = history if history is not None else ResultHistory()
        self.pending_sql: str = ""
        self._token: Optional[str] = None

    # ========== In-flight guard ==========

    @property
    def in_flight(self) -> bool:
        return self._token is not None

    def abandon(self) -> None:
        """
        Stop waiting on the outstanding request

        The backend call keeps running; its response is discarded on arrival.
        """
        if self._token is not None:
            logger.info(f"Abandoned request {self._token}")
        self._token = None

    def _begin(self) -> str:
        if self._token is not None:
            raise RequestInFlight()
        self._token = uuid.uuid4().hex
        return self._token

    def _finish(self, token: str) -> bool:
        """Release the guard if `token` still owns it; False means superseded"""
        if self._token != token:
            return False
        self._token = None
        return True

    # ========== Preconditions ==========

    def _require_connection(self, needs_model: bool) -> Profile:
        profile = self.store.get_active()
        if profile is None:
            raise NoConnection()
        if needs_model and not profile.ai_model_path:
            raise NoModel()
        return profile

    # ========== Commands ==========

    async def connect(self, profile: Profile) -> str:
        """
        Ask the backend to open `profile`; mark it active only on success

        Returns:
            The backend's acknowledgement string

        Raises:
            BackendInvocationError: connection could not be established
        """
        logger.info(f"[connect] Connecting profile {profile.id} ({profile.db_type.value if profile.db_type else '-'})")
        try:
            ack = await self.backend.invoke(CONNECT, data=profile.model_dump_json())
        except Exception as e:
            error = BackendInvocationError.from_exception(CONNECT, e)
            logger.error(f"[connect] Failed: {error}")
            raise error from e

        self.store.set_active(profile)
        logger.info(f"[connect] Profile {profile.id} is now active")
        return ack

    async def ask(self, question: str) -> ResultEntry:
        """Natural-language question → generated SQL → rows"""
        profile = self._require_connection(needs_model=True)
        entry = await self._run(ASK, data=profile.model_dump_json(), question=question)
        if entry.row_count is not None:
            logger.info(f"[ask] Retrieved {entry.row_count} row(s)")
        return entry

    async def ask_for_sql(self, question: str) -> ResultEntry:
        """
        Natural-language question → SQL text only

        The SQL becomes `pending_sql` for the caller to review and run with
        query(); nothing is executed here.
        """
        profile = self._require_connection(needs_model=True)
        entry = await self._run(ASK_FOR_SQL, data=profile.model_dump_json(), question=question)
        self.pending_sql = entry.sql
        logger.info("[ask_for_sql] Retrieved query statement")
        return entry

    async def query(self, sql_text: str) -> ResultEntry:
        """Run SELECT text directly; no model needed"""
        profile = self._require_connection(needs_model=False)
        ensure_read_only(sql_text)
        entry = await self._run(QUERY, data=profile.model_dump_json(), sql=sql_text)
        if entry.row_count is not None:
            logger.info(f"[query] Retrieved {entry.row_count} row(s)")
        return entry

    async def _run(self, command: str, **arguments: Any) -> ResultEntry:
        """
        Invoke one command under the request token and record the outcome

        Transport failures raise BackendInvocationError and leave history
        untouched; soft errors (err/msg in the payload) are appended. Once the
        request is abandoned, success and failure alike end in StaleResponse.
        """
        token = self._begin()
        failure: Optional[Exception] = None
        try:
            raw = await self.backend.invoke(command, **arguments)
            entry = ResultEntry.model_validate_json(raw)
        except Exception as e:
            failure = e
        finally:
            superseded = not self._finish(token)

        if superseded:
            logger.warning(f"[{command}] Discarding outcome of abandoned request {token}")
            raise StaleResponse(command) from failure

        if isinstance(failure, QueryDeskError):
            raise failure
        if failure is not None:
            error = BackendInvocationError.from_exception(command, failure)
            logger.error(f"[{command}] Failed: {error}")
            raise error from failure

        self.history.append(entry)
        if entry.is_soft_error:
            logger.warning(f"[{command}] Backend reported: {entry.err} {entry.msg or ''}".rstrip())
        return entry
