import time

import jwt
import pytest

from hooddeals.core.errors import IdentityError
from hooddeals.models.user_models import StoredUser
from hooddeals.screens.identity import IdentityResolver
from hooddeals.services.user_service import UserService

from conftest import ME


def _resolver(sessions, api):
    return IdentityResolver(sessions, UserService(api))


def test_resolves_email_to_backend_id_and_caches(http, sessions, signed_in, api):
    http.add("GET", "/api/user/by-email", ME)
    resolver = _resolver(sessions, api)

    assert resolver.resolve() == 1
    assert resolver.resolve() == 1

    calls = http.calls_to("GET", "/api/user/by-email")
    assert len(calls) == 1
    assert calls[0].params == {"email": "ana@x.com"}
    assert calls[0].headers["Authorization"] == "Bearer tok-123"
    # resolved id is written back into the session
    assert sessions.load().user.id == 1


def test_reset_forces_a_new_lookup(http, sessions, signed_in, api):
    http.add("GET", "/api/user/by-email", ME)
    resolver = _resolver(sessions, api)
    resolver.resolve()
    resolver.reset()
    resolver.resolve()
    assert len(http.calls_to("GET", "/api/user/by-email")) == 2


def test_missing_email_halts_before_network(http, sessions, api):
    sessions.save("tok", StoredUser(name="No Email"))
    with pytest.raises(IdentityError, match="No stored user email"):
        _resolver(sessions, api).resolve()
    assert http.calls == []


def test_unknown_account(http, sessions, signed_in, api):
    http.add("GET", "/api/user/by-email", {"error": "nope"}, status=404)
    with pytest.raises(IdentityError, match="Account not found"):
        _resolver(sessions, api).resolve()


def test_server_error_status_is_reported(http, sessions, signed_in, api):
    http.add("GET", "/api/user/by-email", "boom", status=500)
    with pytest.raises(IdentityError, match="500"):
        _resolver(sessions, api).resolve()


def test_malformed_body(http, sessions, signed_in, api):
    http.add("GET", "/api/user/by-email", {"email": "ana@x.com"})
    with pytest.raises(IdentityError):
        _resolver(sessions, api).resolve()


def test_expired_token_is_rejected_locally(http, sessions, api):
    token = jwt.encode({"sub": "1", "exp": int(time.time()) - 3600}, "k", algorithm="HS256")
    sessions.save(token, StoredUser(email="ana@x.com"))

    with pytest.raises(IdentityError, match="expired"):
        _resolver(sessions, api).resolve()
    assert http.calls == []
