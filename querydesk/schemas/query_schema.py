from pydantic import BaseModel
from typing import Optional, List

from querydesk.dtos import ResultEntry


class QuestionRequest(BaseModel):
    """Natural-language question for ask / ask-for-sql"""
    question: str


class QueryRequest(BaseModel):
    """SQL text for direct execution"""
    sql: str


class ResultsResponse(BaseModel):
    results: List[ResultEntry]
    total: int


class StatusResponse(BaseModel):
    """Orchestrator state the UI renders (spinner, pending SQL, connection badge)"""
    in_flight: bool
    pending_sql: str
    connected: bool
    db_type: Optional[str] = None
