"""
SQL Protection
Syntactic read-only guard applied before a direct query is sent
"""
import re

from querydesk.core.errors import NotReadOnly

# Statement must open with the SELECT keyword (leading whitespace allowed)
SQL_READ_ONLY = re.compile(r"^\s*select\b", re.I)


def is_read_only(sql: str) -> bool:
    return bool(sql) and SQL_READ_ONLY.match(sql) is not None


def ensure_read_only(sql: str) -> str:
    """
    Reject anything that does not start with SELECT.

    This is a prefix check only; the backend still decides what the
    connection is allowed to run.
    """
    if not is_read_only(sql):
        raise NotReadOnly(sql)
    return sql
