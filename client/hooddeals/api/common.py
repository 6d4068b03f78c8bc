# client/hooddeals/api/common.py

from typing import Optional

from fastapi import HTTPException

from hooddeals.core.errors import (
    ApiError,
    FormValidationError,
    HoodDealsError,
    IdentityError,
    MalformedResponseError,
    NetworkError,
    RequestCancelled,
)
from hooddeals.core.session import SessionManager
from hooddeals.db.local_storage import LocalStorage
from hooddeals.screens.identity import IdentityResolver
from hooddeals.services.api_client import ApiClient
from hooddeals.services.auth_service import AuthService
from hooddeals.services.chat_service import ChatService
from hooddeals.services.listing_service import ListingService
from hooddeals.services.user_service import UserService


# --------------------------
# Device state + shared client
# --------------------------
storage = LocalStorage()
sessions = SessionManager(storage)

api_client = ApiClient(token_provider=lambda: sessions.current_token())
auth_service = AuthService(api_client)
user_service = UserService(api_client)
listing_service = ListingService(api_client)
chat_service = ChatService(api_client)


def new_resolver(client: Optional[ApiClient] = None) -> IdentityResolver:
    """
    One resolver per screen entry. A screen with its own client resolves
    through it, so cancelling that screen never touches the shared client.
    """
    users = UserService(client) if client is not None else user_service
    return IdentityResolver(sessions, users)


def screen_client() -> ApiClient:
    """Dedicated client for a long-lived screen, closed when the screen is."""
    return ApiClient(token_provider=lambda: sessions.current_token())


# --------------------------
# Error mapping
# --------------------------
def to_http_error(e: HoodDealsError) -> HTTPException:
    if isinstance(e, IdentityError):
        return HTTPException(status_code=401, detail=e.message)
    if isinstance(e, FormValidationError):
        return HTTPException(status_code=400, detail=e.message)
    if isinstance(e, RequestCancelled):
        return HTTPException(status_code=409, detail=e.message)
    if isinstance(e, NetworkError):
        return HTTPException(status_code=504, detail=e.message)
    if isinstance(e, ApiError):
        status = e.status_code if 400 <= e.status_code < 500 else 502
        return HTTPException(status_code=status, detail=e.server_error or e.message)
    if isinstance(e, MalformedResponseError):
        return HTTPException(status_code=502, detail=e.message)
    return HTTPException(status_code=400, detail=e.message)
