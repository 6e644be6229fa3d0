from pydantic import BaseModel
from typing import Optional, List

from querydesk.dtos import Profile


class ProfileListResponse(BaseModel):
    """All stored profiles"""
    profiles: List[Profile]
    total: int


class ConnectResponse(BaseModel):
    """Answer of a successful connect"""
    status: str  # "connected"
    message: str
    profile: Profile


class ActiveProfileResponse(BaseModel):
    connected: bool
    profile: Optional[Profile] = None


class EditBufferResponse(BaseModel):
    on_edit: bool
    profile: Profile


class ModelPathRequest(BaseModel):
    path: str


class ModelPathResponse(BaseModel):
    path: str
