# client/hooddeals/core/session.py

import json
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel

from hooddeals.core.logger import get_logger
from hooddeals.db.local_storage import LocalStorage
from hooddeals.models.user_models import StoredUser

log = get_logger("session")

SESSION_KEY = "session"
SESSION_VERSION = 2

# Keys written by earlier generations of the client, probed in this order.
LEGACY_PROFILE_KEYS = ["user", "authUser", "profile", "googleAuth", "username"]
LEGACY_KEYS = LEGACY_PROFILE_KEYS + ["userID", "token"]
# profiles copied verbatim from an OAuth provider
PROVIDER_PROFILE_KEYS = {"googleAuth"}


class Session(BaseModel):
    version: int = SESSION_VERSION
    token: Optional[str] = None
    user: StoredUser = StoredUser()


# ---------------------------------------------------------------------------
# LEGACY PROFILE DISCOVERY
# ---------------------------------------------------------------------------
def _profile_from_value(raw: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(raw)
    except ValueError:
        # some builds stored a bare string
        if "@" in raw:
            return {"email": raw}
        return {"name": raw}

    if not isinstance(parsed, dict):
        return None
    if parsed.get("name") or parsed.get("email") or parsed.get("picture"):
        return parsed
    nested = parsed.get("user")
    if isinstance(nested, dict) and (
        nested.get("name") or nested.get("email") or nested.get("picture")
    ):
        return nested
    return None


def _find_legacy_entry(storage: LocalStorage) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
    for key in LEGACY_PROFILE_KEYS:
        raw = storage.get_item(key)
        if not raw:
            continue
        profile = _profile_from_value(raw)
        if profile is not None:
            log.debug("legacy profile found under %r", key)
            return key, profile
    return None, None


def find_legacy_profile(storage: LocalStorage) -> Optional[Dict[str, Any]]:
    """First legacy key holding a usable profile wins; later keys are not read."""
    return _find_legacy_entry(storage)[1]


# ---------------------------------------------------------------------------
# MIGRATIONS (record version n -> n + 1)
# ---------------------------------------------------------------------------
def _migrate_v0(storage: LocalStorage, record: Dict[str, Any]) -> Dict[str, Any]:
    """Loose legacy keys -> {"version": 1, "token", "profile"}."""
    key, profile = _find_legacy_entry(storage)
    profile = dict(profile or {})
    if key in PROVIDER_PROFILE_KEYS:
        # an OAuth provider's subject id, numeric or not, is never a backend id
        profile.pop("id", None)
    user_id = storage.get_item("userID")
    if user_id and "id" not in profile:
        profile = dict(profile, id=user_id)
    return {
        "version": 1,
        "token": storage.get_item("token"),
        "profile": profile,
    }


def _migrate_v1(storage: LocalStorage, record: Dict[str, Any]) -> Dict[str, Any]:
    profile = dict(record.get("profile") or {})
    raw_id = profile.get("id")
    try:
        profile["id"] = int(raw_id) if raw_id not in (None, "") else None
    except (TypeError, ValueError):
        # not a backend id
        profile["id"] = None
    return {
        "version": 2,
        "token": record.get("token") or None,
        "user": profile,
    }


MIGRATIONS = {
    0: _migrate_v0,
    1: _migrate_v1,
}


class SessionManager:
    """The one place the current user and token are persisted."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _read_record(self) -> Optional[Dict[str, Any]]:
        raw = self.storage.get_item(SESSION_KEY)
        if raw:
            try:
                record = json.loads(raw)
            except ValueError:
                log.warning("discarding unreadable session record")
                self.storage.remove_item(SESSION_KEY)
                return None
            if isinstance(record, dict):
                return record
            return None

        if any(self.storage.get_item(k) for k in LEGACY_KEYS):
            return {"version": 0}
        return None

    def load(self) -> Optional[Session]:
        record = self._read_record()
        if record is None:
            return None

        version = int(record.get("version", 0))
        migrated = version < SESSION_VERSION
        while version < SESSION_VERSION:
            record = MIGRATIONS[version](self.storage, record)
            version = record["version"]

        session = Session.model_validate(record)
        if migrated:
            log.info("session migrated to version %s", SESSION_VERSION)
            self._write(session)
            self.storage.multi_remove(LEGACY_KEYS)

        if not session.token and session.user.is_empty():
            return None
        return session

    def _write(self, session: Session):
        self.storage.set_item(SESSION_KEY, session.model_dump_json())

    def save(self, token: Optional[str], user: StoredUser) -> Session:
        session = Session(token=token, user=user)
        self._write(session)
        self.storage.multi_remove(LEGACY_KEYS)
        return session

    def update_user(self, **fields) -> Optional[Session]:
        session = self.load()
        if session is None:
            return None
        session.user = session.user.model_copy(update=fields)
        self._write(session)
        return session

    def current_token(self) -> Optional[str]:
        session = self.load()
        return session.token if session else None

    def clear(self):
        self.storage.clear()
