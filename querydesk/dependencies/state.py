from fastapi import HTTPException, Request

from querydesk.core.errors import QueryDeskError
from querydesk.services import ConfigStore, QueryOrchestrator


def get_config_store(request: Request) -> ConfigStore:
    """
    Session ConfigStore built at startup.

    Usage:
        @router.get("/profiles")
        def list_profiles(store: ConfigStore = Depends(get_config_store)):
            ...
    """
    store = getattr(request.app.state, "config_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Profile store not initialized")
    return store


def get_orchestrator(request: Request) -> QueryOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Query orchestrator not initialized")
    return orchestrator


def http_error(exc: QueryDeskError) -> HTTPException:
    """Map a domain error onto the HTTP answer the UI expects"""
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())
