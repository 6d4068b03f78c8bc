import pytest

from hooddeals.core.errors import ApiError, FormValidationError
from hooddeals.models.user_models import GithubCodeIn, GoogleProfileIn, LoginIn, SignUpIn
from hooddeals.screens.auth import AuthFlow
from hooddeals.services.auth_service import AuthService

AUTH_OK = {"token": "jwt-abc", "user": {"id": 1, "email": "ana@x.com", "name": "Ana"}}


@pytest.fixture
def flow(sessions, api):
    return AuthFlow(sessions, AuthService(api))


def test_login_requires_both_fields(http, flow):
    with pytest.raises(FormValidationError, match="both email and password"):
        flow.login(LoginIn(email="ana@x.com", password=""))
    assert http.calls == []


def test_login_persists_session(http, flow, sessions):
    http.add("POST", "/api/auth/login", AUTH_OK)

    flow.login(LoginIn(email=" ana@x.com ", password="secret1"))

    assert http.calls[0].json == {"email": "ana@x.com", "password": "secret1"}
    session = sessions.load()
    assert session.token == "jwt-abc"
    assert session.user.id == 1


def test_login_failure_surfaces_server_message(http, flow, sessions):
    http.add("POST", "/api/auth/login", {"error": "Wrong password"}, status=401)
    with pytest.raises(ApiError, match="Wrong password"):
        flow.login(LoginIn(email="ana@x.com", password="x"))
    assert sessions.load() is None


def test_login_failure_without_message_falls_back(http, flow):
    http.add("POST", "/api/auth/login", None, status=401)
    with pytest.raises(ApiError, match="Invalid credentials"):
        flow.login(LoginIn(email="ana@x.com", password="x"))


def test_response_without_token_is_rejected(http, flow, sessions):
    http.add("POST", "/api/auth/github", {"error": "bad_verification_code"})
    with pytest.raises(ApiError, match="bad_verification_code"):
        flow.github(GithubCodeIn(code="c0de"))
    assert sessions.load() is None


def test_signup_password_mismatch(http, flow):
    with pytest.raises(FormValidationError, match="Passwords do not match"):
        flow.sign_up(SignUpIn(name="Ana", email="ana@x.com",
                              password="secret1", confirm_password="secret2"))
    assert http.calls == []


def test_signup_success(http, flow, sessions):
    http.add("POST", "/api/auth/signup", AUTH_OK)
    flow.sign_up(SignUpIn(name="Ana", email="ana@x.com",
                          password="secret1", confirm_password="secret1"))
    assert http.calls[0].json == {"email": "ana@x.com", "password": "secret1", "name": "Ana"}
    assert sessions.load().user.email == "ana@x.com"


def test_google_exchange_posts_profile(http, flow, sessions):
    http.add("POST", "/api/auth/google", AUTH_OK)
    flow.google(GoogleProfileIn(id="g-1", email="ana@x.com", name="Ana",
                                picture="https://img.test/a.png"))
    assert http.calls[0].json["id"] == "g-1"
    assert "Authorization" not in http.calls[0].headers
    assert sessions.current_token() == "jwt-abc"
