"""
Connection profile DTOs
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class DbType(str, Enum):
    """Database kinds the backend knows how to connect to"""
    MYSQL = "MySQL"
    POSTGRESQL = "PostgreSQL"
    SQLITE = "SQLite"


class Profile(BaseModel):
    """
    A reusable connection configuration (called Config in the UI)

    id == 0 means "not yet persisted / being created".
    Fields left unset on an update keep their stored values, so
    Profile(id=3, connection_string="...") is a valid partial update.
    """
    id: int = Field(default=0, ge=0)
    db_type: Optional[DbType] = None
    connection_string: str = ""
    ai_cli_path: str = ""  # passed through, unused here
    ai_model_path: str = ""
    sql_knowledge: str = ""

    @field_validator("db_type", mode="before")
    @classmethod
    def _blank_db_type(cls, value):
        # The UI starts a new profile with db_type ""
        if value == "":
            return None
        return value

    @property
    def is_persisted(self) -> bool:
        return self.id > 0


def blank_profile() -> Profile:
    """Fresh edit buffer for the "create a connection" form"""
    return Profile()
