"""
Natural Language to SQL commands - thin layer over QueryOrchestrator
"""
import logging
from fastapi import APIRouter, Depends

from querydesk.core.errors import QueryDeskError
from querydesk.dependencies.state import get_orchestrator, http_error
from querydesk.dtos import ResultEntry
from querydesk.schemas import QuestionRequest, QueryRequest, ResultsResponse, StatusResponse
from querydesk.services import QueryOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Query"])


@router.post("/ask", response_model=ResultEntry)
async def ask(p: QuestionRequest, orchestrator: QueryOrchestrator = Depends(get_orchestrator)):
    """
    Question → SQL → rows, appended to the result history

    **Errors**:
    - 400: NoConnection / NoModel
    - 409: another request is running
    - 502: backend invocation failed (detail.diagnostics lists "key: value")
    """
    try:
        return await orchestrator.ask(p.question)
    except QueryDeskError as e:
        raise http_error(e)


@router.post("/ask-for-sql", response_model=ResultEntry)
async def ask_for_sql(p: QuestionRequest, orchestrator: QueryOrchestrator = Depends(get_orchestrator)):
    """Question → SQL text only; also exposed as `pending_sql` in /status"""
    try:
        return await orchestrator.ask_for_sql(p.question)
    except QueryDeskError as e:
        raise http_error(e)


@router.post("/query", response_model=ResultEntry)
async def query(q: QueryRequest, orchestrator: QueryOrchestrator = Depends(get_orchestrator)):
    """
    Run SELECT text on the active connection

    **Errors**:
    - 400: NoConnection / NotReadOnly
    """
    try:
        return await orchestrator.query(q.sql)
    except QueryDeskError as e:
        raise http_error(e)


@router.get("/results", response_model=ResultsResponse)
async def results(orchestrator: QueryOrchestrator = Depends(get_orchestrator)):
    entries = list(orchestrator.history.entries)
    return ResultsResponse(results=entries, total=len(entries))


@router.get("/status", response_model=StatusResponse)
async def status(orchestrator: QueryOrchestrator = Depends(get_orchestrator)):
    active = orchestrator.store.get_active()
    return StatusResponse(
        in_flight=orchestrator.in_flight,
        pending_sql=orchestrator.pending_sql,
        connected=active is not None,
        db_type=active.db_type.value if active and active.db_type else None
    )
