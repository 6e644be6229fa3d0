import logging
from fastapi import FastAPI

from querydesk.core.config import settings
from querydesk.core.database import init_db, engine
from querydesk.repositories import SqlKeyValueStore
from querydesk.pipeline.backend import HttpBackendClient
from querydesk.services import ConfigStore, QueryOrchestrator
from querydesk.controllers import profiles_controller, queries_controller

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(title=settings.APP_TITLE)


@app.on_event("startup")
def startup():
    """
    Create the slot table and build the session store and orchestrator
    """
    init_db()

    store = ConfigStore(SqlKeyValueStore(engine))
    app.state.config_store = store
    app.state.orchestrator = QueryOrchestrator(store, HttpBackendClient(settings.BACKEND_URL))

    logger.info(f"querydesk ready (backend={settings.BACKEND_URL})")


# Include routers
app.include_router(profiles_controller.router)
app.include_router(queries_controller.router)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "querydesk API",
        "docs": "/docs",
        "version": "0.1.0"
    }
