"""
Result history DTOs
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class ResultEntry(BaseModel):
    """
    One completed backend interaction

    Immutable once built. `err`/`msg` are only set when the backend itself
    reported a soft failure inside an otherwise successful response.
    """
    model_config = ConfigDict(frozen=True)

    question: str = ""  # empty for direct queries
    sql: str = ""
    data: Optional[List[Dict[str, Any]]] = None
    err: Optional[str] = None
    msg: Optional[str] = None

    @property
    def row_count(self) -> Optional[int]:
        if self.data is None:
            return None
        return len(self.data)

    @property
    def is_soft_error(self) -> bool:
        return bool(self.err or self.msg)
