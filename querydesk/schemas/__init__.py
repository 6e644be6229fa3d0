from .profile_schema import (
    ProfileListResponse,
    ConnectResponse,
    ActiveProfileResponse,
    EditBufferResponse,
    ModelPathRequest,
    ModelPathResponse,
)
from .query_schema import QuestionRequest, QueryRequest, ResultsResponse, StatusResponse

__all__ = [
    "ProfileListResponse",
    "ConnectResponse",
    "ActiveProfileResponse",
    "EditBufferResponse",
    "ModelPathRequest",
    "ModelPathResponse",
    "QuestionRequest",
    "QueryRequest",
    "ResultsResponse",
    "StatusResponse",
]
