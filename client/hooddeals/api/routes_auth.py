# client/hooddeals/api/routes_auth.py

from fastapi import APIRouter

from hooddeals.api import common
from hooddeals.api.routes_conversation import close_all_screens
from hooddeals.core.errors import HoodDealsError
from hooddeals.core.security import is_token_expired
from hooddeals.models.user_models import (
    GithubCodeIn,
    GoogleProfileIn,
    LoginIn,
    SessionOut,
    SignUpIn,
)
from hooddeals.screens.auth import AuthFlow

router = APIRouter(prefix="/auth", tags=["auth"])


def _flow() -> AuthFlow:
    return AuthFlow(common.sessions, common.auth_service)


def _session_out() -> SessionOut:
    session = common.sessions.load()
    if session is None:
        return SessionOut(signed_in=False)
    return SessionOut(
        signed_in=True,
        user=session.user,
        token_expired=is_token_expired(session.token),
    )


# --------------------------
# LOGIN
# --------------------------
@router.post("/login", response_model=SessionOut)
def login(data: LoginIn):
    try:
        _flow().login(data)
    except HoodDealsError as e:
        raise common.to_http_error(e)
    return _session_out()


# --------------------------
# SIGN UP
# --------------------------
@router.post("/signup", response_model=SessionOut)
def signup(data: SignUpIn):
    try:
        _flow().sign_up(data)
    except HoodDealsError as e:
        raise common.to_http_error(e)
    return _session_out()


# --------------------------
# OAUTH EXCHANGES
# --------------------------
@router.post("/google", response_model=SessionOut)
def google(profile: GoogleProfileIn):
    try:
        _flow().google(profile)
    except HoodDealsError as e:
        raise common.to_http_error(e)
    return _session_out()


@router.post("/github", response_model=SessionOut)
def github(data: GithubCodeIn):
    try:
        _flow().github(data)
    except HoodDealsError as e:
        raise common.to_http_error(e)
    return _session_out()


# --------------------------
# SESSION
# --------------------------
@router.get("/session", response_model=SessionOut)
def current_session():
    return _session_out()


@router.post("/logout")
def logout():
    close_all_screens()
    common.sessions.clear()
    return {"ok": True}
