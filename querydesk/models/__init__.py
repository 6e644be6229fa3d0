"""
Models - MVC2 Pattern
All database models organized by layer
"""
from querydesk.models.kv_slot import KvSlot

__all__ = [
    "KvSlot",
]
