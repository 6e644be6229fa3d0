"""
Store change notification DTOs
"""
from typing import Optional
from pydantic import BaseModel


class StoreEvent(BaseModel):
    """
    Event emitted by ConfigStore to its subscribers
    """
    kind: str  # profiles_changed, active_changed, edit_buffer_changed, model_path_changed
    profile_id: Optional[int] = None
