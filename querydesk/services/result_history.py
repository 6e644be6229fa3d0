"""
Session-scoped, append-only history of backend interactions
"""
from typing import Iterator, List, Optional, Tuple

from querydesk.dtos import ResultEntry


class ResultHistory:
    """Entries are only ever appended; nothing is removed or replaced"""

    def __init__(self):
        self._entries: List[ResultEntry] = []

    def append(self, entry: ResultEntry) -> int:
        """Append and return the entry's position"""
        self._entries.append(entry)
        return len(self._entries) - 1

    @property
    def entries(self) -> Tuple[ResultEntry, ...]:
        return tuple(self._entries)

    @property
    def latest(self) -> Optional[ResultEntry]:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ResultEntry]:
        return iter(tuple(self._entries))
