"""
Key-value slot model - MVC2 Pattern
MODEL = Entidade + Lógica de Acesso a Dados
"""
from sqlalchemy import Column, Text
from sqlmodel import SQLModel, Field


class KvSlot(SQLModel, table=True):
    """
    MODEL em MVC2 - KvSlot

    One named slot of the durable key-value store.
    The profile collection lives in slot "configs" (JSON array, rewritten
    wholesale on every mutation) and the default model path in "modelPath".
    """
    __tablename__ = "kv_slots"

    key: str = Field(primary_key=True, max_length=120)
    value: str = Field(sa_column=Column(Text, nullable=False))
