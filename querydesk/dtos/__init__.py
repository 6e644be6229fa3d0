"""
DTOs (Data Transfer Objects)
Internal objects for passing data between layers
"""
from querydesk.dtos.profile import DbType, Profile, blank_profile
from querydesk.dtos.result import ResultEntry
from querydesk.dtos.events import StoreEvent

__all__ = [
    "DbType",
    "Profile",
    "blank_profile",
    "ResultEntry",
    "StoreEvent",
]
