"""
Controller for connection profiles: CRUD, edit buffer, connect.
"""
import logging
from fastapi import APIRouter, Depends

from querydesk.core.errors import ProfileNotFound, QueryDeskError
from querydesk.dependencies.state import get_config_store, get_orchestrator, http_error
from querydesk.dtos import Profile
from querydesk.schemas import (
    ProfileListResponse,
    ConnectResponse,
    ActiveProfileResponse,
    EditBufferResponse,
    ModelPathRequest,
    ModelPathResponse,
)
from querydesk.services import ConfigStore, QueryOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("", response_model=ProfileListResponse)
async def list_profiles(store: ConfigStore = Depends(get_config_store)):
    """Every stored profile, in insertion order"""
    profiles = store.list()
    return ProfileListResponse(profiles=profiles, total=len(profiles))


@router.post("", response_model=Profile)
async def upsert_profile(p: Profile, store: ConfigStore = Depends(get_config_store)):
    """
    Create (id = 0) or update (id > 0) a profile.

    Fields omitted from the body keep their stored values on update.

    **Errors**:
    - 404: id > 0 does not match any stored profile
    - 500: stored profiles could not be read
    """
    try:
        saved = store.upsert(p)
    except QueryDeskError as e:
        raise http_error(e)
    if saved is None:
        raise http_error(ProfileNotFound(p.id))
    return saved


@router.delete("/{profile_id}", status_code=204)
async def delete_profile(profile_id: int, store: ConfigStore = Depends(get_config_store)):
    """
    Delete a profile; unknown ids are ignored

    **Errors**:
    - 500: stored profiles could not be read
    """
    try:
        store.delete(profile_id)
    except QueryDeskError as e:
        raise http_error(e)


@router.get("/active", response_model=ActiveProfileResponse)
async def active_profile(store: ConfigStore = Depends(get_config_store)):
    profile = store.get_active()
    return ActiveProfileResponse(connected=profile is not None, profile=profile)


@router.post("/{profile_id}/connect", response_model=ConnectResponse)
async def connect_profile(
    profile_id: int,
    store: ConfigStore = Depends(get_config_store),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator)
):
    """
    Open a stored profile on the backend and make it the active one.

    **Errors**:
    - 404: unknown profile
    - 502: backend could not establish the connection
    """
    profile = store.get(profile_id)
    if profile is None:
        raise http_error(ProfileNotFound(profile_id))

    logger.info(f"[connect] Connecting profile {profile_id}")
    try:
        await orchestrator.connect(profile)
    except QueryDeskError as e:
        raise http_error(e)

    return ConnectResponse(
        status="connected",
        message="Database connection has been established.",
        profile=profile
    )


# ========== Edit buffer ==========

@router.get("/edit-buffer", response_model=EditBufferResponse)
async def get_edit_buffer(store: ConfigStore = Depends(get_config_store)):
    return EditBufferResponse(on_edit=store.on_edit, profile=store.get_edit_buffer())


@router.put("/edit-buffer", response_model=EditBufferResponse)
async def put_edit_buffer(p: Profile, store: ConfigStore = Depends(get_config_store)):
    """Replace the profile being edited (form state)"""
    store.set_edit_buffer(p)
    return EditBufferResponse(on_edit=store.on_edit, profile=store.get_edit_buffer())


@router.post("/edit-buffer/new", response_model=EditBufferResponse)
async def new_profile(store: ConfigStore = Depends(get_config_store)):
    store.begin_new()
    return EditBufferResponse(on_edit=store.on_edit, profile=store.get_edit_buffer())


@router.post("/edit-buffer/save", response_model=Profile)
async def save_edit_buffer(store: ConfigStore = Depends(get_config_store)):
    """
    Persist the edit buffer.

    **Errors**:
    - 400: db_type, connection_string or ai_model_path missing
    - 404: buffer points at a profile that no longer exists
    """
    try:
        return store.save_edit_buffer()
    except QueryDeskError as e:
        raise http_error(e)


@router.post("/edit-buffer/cancel", response_model=EditBufferResponse)
async def cancel_edit(store: ConfigStore = Depends(get_config_store)):
    store.cancel_edit()
    return EditBufferResponse(on_edit=store.on_edit, profile=store.get_edit_buffer())


@router.post("/{profile_id}/edit", response_model=EditBufferResponse)
async def edit_profile(profile_id: int, store: ConfigStore = Depends(get_config_store)):
    """Load a stored profile into the edit buffer"""
    try:
        store.begin_edit(profile_id)
    except QueryDeskError as e:
        raise http_error(e)
    return EditBufferResponse(on_edit=store.on_edit, profile=store.get_edit_buffer())


# ========== Default model path ==========

@router.get("/model-path", response_model=ModelPathResponse)
async def get_model_path(store: ConfigStore = Depends(get_config_store)):
    return ModelPathResponse(path=store.model_path)


@router.put("/model-path", response_model=ModelPathResponse)
async def put_model_path(req: ModelPathRequest, store: ConfigStore = Depends(get_config_store)):
    store.update_model_path(req.path)
    return ModelPathResponse(path=store.model_path)
