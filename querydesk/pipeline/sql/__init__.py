"""
SQL utilities (protection)
"""
from querydesk.pipeline.sql.protector import ensure_read_only, is_read_only

__all__ = [
    "ensure_read_only",
    "is_read_only",
]
