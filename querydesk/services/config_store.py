"""
Service for connection profile state
Owns the persisted profile collection, the active profile and the edit buffer
"""
import logging
from typing import Callable, List, Optional
from pydantic import TypeAdapter, ValidationError

from querydesk.core.errors import MissingProfileField, ProfileNotFound, StoreCorrupted
from querydesk.dtos import Profile, StoreEvent, blank_profile
from querydesk.repositories import KeyValueStore

logger = logging.getLogger(__name__)

CONFIGS_KEY = "configs"
MODEL_PATH_KEY = "modelPath"

# Fields a profile must carry before the edit buffer can be saved
REQUIRED_FIELDS = ("db_type", "connection_string", "ai_model_path")

_profiles_adapter = TypeAdapter(List[Profile])

StoreListener = Callable[[StoreEvent], None]


def next_profile_id(profiles: List[Profile]) -> int:
    """1 + the largest id in use (0 when empty). Single writer only."""
    return max((p.id for p in profiles), default=0) + 1


class ConfigStore:
    """
    Durable CRUD over profiles plus the session state around them

    Writes are read-modify-write against the `configs` slot and update the
    in-memory view before returning, so list() sees them immediately.
    """

    def __init__(self, storage: KeyValueStore):
        self.storage = storage
        try:
            self._profiles: List[Profile] = self._read_profiles()
        except StoreCorrupted:
            # Start with an empty view; writes keep failing until the slot is repaired
            self._profiles = []
        self._model_path: str = storage.get(MODEL_PATH_KEY) or ""
        self._active: Optional[Profile] = None
        self._edit_buffer: Profile = blank_profile()
        self._on_edit = False
        self._listeners: List[StoreListener] = []

        logger.info(f"Loaded {len(self._profiles)} profile(s) from storage")

    # ========== Persistence ==========

    def _read_profiles(self) -> List[Profile]:
        raw = self.storage.get(CONFIGS_KEY)
        if not raw:
            return []
        try:
            return _profiles_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Slot '{CONFIGS_KEY}' is not a profile list: {e}")
            raise StoreCorrupted(f"Stored profiles could not be read: {e.error_count()} error(s).") from e

    def _write_profiles(self, profiles: List[Profile]) -> None:
        self.storage.set(CONFIGS_KEY, _profiles_adapter.dump_json(profiles).decode())
        self._profiles = profiles

    # ========== CRUD ==========

    def list(self) -> List[Profile]:
        """All persisted profiles, in insertion order"""
        return list(self._profiles)

    def get(self, profile_id: int) -> Optional[Profile]:
        for profile in self._profiles:
            if profile.id == profile_id:
                return profile
        return None

    def upsert(self, profile: Optional[Profile]) -> Optional[Profile]:
        """
        Insert or update a profile

        id == 0 allocates the next id and appends. Any other id shallow-merges
        the fields set on `profile` over the stored record with that id.

        Args:
            profile: Profile to save; None is ignored

        Returns:
            The stored profile, or None when nothing was written
        """
        if profile is None:
            return None

        current = self._read_profiles()

        if profile.id == 0:
            saved = profile.model_copy(update={"id": next_profile_id(current)})
            current.append(saved)
            logger.info(f"Created profile {saved.id} ({saved.db_type.value if saved.db_type else '-'})")
        else:
            index = next((i for i, p in enumerate(current) if p.id == profile.id), None)
            if index is None:
                logger.warning(f"Upsert ignored: no profile with id {profile.id}")
                return None
            changes = profile.model_dump(exclude_unset=True)
            saved = current[index].model_copy(update=changes)
            current[index] = saved
            logger.info(f"Updated profile {saved.id} (fields: {', '.join(sorted(changes))})")

        self._write_profiles(current)
        self._emit(StoreEvent(kind="profiles_changed", profile_id=saved.id))
        return saved

    def delete(self, profile_id: int) -> None:
        """
        Remove a profile by id; unknown ids are a no-op

        Deleting the active profile also clears the activation.
        """
        current = self._read_profiles()
        remaining = [p for p in current if p.id != profile_id]
        if len(remaining) == len(current):
            logger.info(f"Delete ignored: no profile with id {profile_id}")
            return

        self._write_profiles(remaining)
        logger.info(f"Deleted profile {profile_id}")

        was_active = self._active is not None and self._active.id == profile_id
        if was_active:
            logger.info(f"Profile {profile_id} was active; clearing activation")
            self._active = None

        self._emit(StoreEvent(kind="profiles_changed", profile_id=profile_id))
        if was_active:
            self._emit(StoreEvent(kind="active_changed", profile_id=None))

    # ========== Active profile ==========

    def get_active(self) -> Optional[Profile]:
        return self._active

    def set_active(self, profile: Optional[Profile]) -> None:
        """Held by reference; only the orchestrator calls this after connect"""
        self._active = profile
        self._emit(StoreEvent(kind="active_changed", profile_id=profile.id if profile else None))

    # ========== Edit buffer ==========

    @property
    def on_edit(self) -> bool:
        return self._on_edit

    def get_edit_buffer(self) -> Profile:
        return self._edit_buffer

    def set_edit_buffer(self, profile: Profile) -> None:
        self._edit_buffer = profile
        self._emit(StoreEvent(kind="edit_buffer_changed", profile_id=profile.id))

    def begin_new(self) -> Profile:
        """Start the "create a connection" flow with a blank buffer"""
        self._on_edit = True
        self.set_edit_buffer(blank_profile())
        return self._edit_buffer

    def begin_edit(self, profile_id: int) -> Profile:
        profile = self.get(profile_id)
        if profile is None:
            raise ProfileNotFound(profile_id)
        self._on_edit = True
        self.set_edit_buffer(profile.model_copy())
        return self._edit_buffer

    def cancel_edit(self) -> None:
        self._on_edit = False

    def save_edit_buffer(self) -> Profile:
        """
        Validate and persist the edit buffer, then reset it

        Raises:
            MissingProfileField: db_type, connection_string or ai_model_path is empty
        """
        buffer = self._edit_buffer
        for field in REQUIRED_FIELDS:
            if not getattr(buffer, field):
                raise MissingProfileField(field)

        saved = self.upsert(buffer)
        if saved is None:
            # Buffer pointed at a profile that was deleted meanwhile
            raise ProfileNotFound(buffer.id)

        self._on_edit = False
        self.set_edit_buffer(blank_profile())
        return saved

    # ========== Default model path ==========

    @property
    def model_path(self) -> str:
        return self._model_path

    def update_model_path(self, path: str) -> None:
        """Last-used model path; independent of any profile's ai_model_path"""
        self._model_path = path
        self.storage.set(MODEL_PATH_KEY, path)
        self._emit(StoreEvent(kind="model_path_changed"))

    # ========== Change notification ==========

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a listener for StoreEvents

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: StoreEvent) -> None:
        """Notify every listener; a failing listener never undoes the store change"""
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener failed on '{event.kind}' event")
