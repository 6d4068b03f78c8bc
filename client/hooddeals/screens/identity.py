# client/hooddeals/screens/identity.py

from typing import Optional

from hooddeals.core.cancellation import CancelToken
from hooddeals.core.errors import ApiError, IdentityError, MalformedResponseError
from hooddeals.core.logger import get_logger
from hooddeals.core.security import is_token_expired
from hooddeals.core.session import SessionManager
from hooddeals.models.user_models import StoredUser
from hooddeals.services.user_service import UserService

log = get_logger("identity")


class IdentityResolver:
    """
    Maps the locally stored profile to the backend's numeric user id.

    The id is cached for the resolver's lifetime. Screens create one
    resolver per entry, so re-entering a screen resolves again.
    """

    def __init__(self, sessions: SessionManager, user_service: UserService):
        self.sessions = sessions
        self.user_service = user_service
        self._user_id: Optional[int] = None

    @property
    def user_id(self) -> Optional[int]:
        return self._user_id

    def stored_user(self) -> Optional[StoredUser]:
        session = self.sessions.load()
        return session.user if session else None

    def reset(self):
        self._user_id = None

    def resolve(self, cancel_token: Optional[CancelToken] = None) -> int:
        if self._user_id is not None:
            return self._user_id

        session = self.sessions.load()
        email = session.user.email if session else None
        if not email:
            raise IdentityError("No stored user email - please sign in again.")

        if is_token_expired(session.token):
            raise IdentityError("Session expired - please sign in again.")

        try:
            user = self.user_service.get_user_by_email(email, cancel_token=cancel_token)
        except ApiError as e:
            log.warning("user lookup for %s failed: %s", email, e.status_code)
            if e.status_code == 404:
                raise IdentityError("Account not found. Try signing in again.") from e
            raise IdentityError(f"Failed to resolve user: {e.status_code}") from e
        except MalformedResponseError as e:
            raise IdentityError("Failed to resolve user: unexpected response") from e

        self._user_id = user.id
        if session.user.id != user.id:
            self.sessions.update_user(id=user.id)
        log.debug("resolved %s -> user %s", email, user.id)
        return user.id
