"""
Repository for the durable key-value slots
"""
import logging
from typing import Dict, Optional, Protocol
from sqlalchemy.engine import Engine
from sqlmodel import Session
from querydesk.models import KvSlot

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistence port used by ConfigStore"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dict-backed slots; nothing survives the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value


class SqlKeyValueStore:
    """Handles KvSlot reads and writes through SQLModel sessions"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def get(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            slot = session.get(KvSlot, key)
            return slot.value if slot else None

    def set(self, key: str, value: str) -> None:
        """
        Create or overwrite a slot

        Args:
            key: Slot name
            value: Serialized slot content
        """
        with Session(self.engine) as session:
            slot = session.get(KvSlot, key)
            if slot is None:
                slot = KvSlot(key=key, value=value)
            else:
                slot.value = value
            session.add(slot)
            session.commit()

        logger.debug(f"Wrote slot '{key}' ({len(value)} chars)")
