"""
Service layer for business logic
"""
from querydesk.services.config_store import ConfigStore
from querydesk.services.result_history import ResultHistory
from querydesk.services.query_orchestrator import QueryOrchestrator

__all__ = [
    "ConfigStore",
    "ResultHistory",
    "QueryOrchestrator",
]
