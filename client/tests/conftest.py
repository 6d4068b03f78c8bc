import json as _json
import os
import tempfile
from collections import namedtuple
from urllib.parse import urlparse

_TMP = tempfile.mkdtemp(prefix="hooddeals-tests-")
os.environ["SESSION_DB_PATH"] = os.path.join(_TMP, "storage.sqlite3")
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["API_BASE_URL"] = "https://api.test"
os.environ["DISPLAY_TIMEZONE"] = "UTC"

import pytest  # noqa: E402

from hooddeals.core.session import SessionManager  # noqa: E402
from hooddeals.db.local_storage import LocalStorage  # noqa: E402
from hooddeals.models.user_models import StoredUser  # noqa: E402
from hooddeals.screens.identity import IdentityResolver  # noqa: E402
from hooddeals.services.api_client import ApiClient  # noqa: E402
from hooddeals.services.chat_service import ChatService  # noqa: E402
from hooddeals.services.user_service import UserService  # noqa: E402


BASE_URL = "https://api.test"
ME = {"id": 1, "email": "ana@x.com", "name": "Ana"}

Call = namedtuple("Call", "method path params json headers timeout")


class FakeResponse:
    def __init__(self, status_code=200, body=None, url=""):
        self.status_code = status_code
        self.url = url
        if body is None:
            self.text = ""
        elif isinstance(body, str):
            self.text = body
        else:
            self.text = _json.dumps(body)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return _json.loads(self.text)


class FakeHttp:
    """
    Stands in for requests.Session. Responses are registered per
    (method, path); the last one registered for a route repeats. A body may
    be a callable taking (params, json) or an exception instance to raise.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    def add(self, method, path, body=None, status=200):
        self.routes.setdefault((method, path), []).append((status, body))

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = urlparse(url).path
        self.calls.append(Call(method, path, params, json, headers, timeout))

        queue = self.routes.get((method, path))
        if not queue:
            return FakeResponse(404, {"error": "not found"}, url)
        status, body = queue.pop(0) if len(queue) > 1 else queue[0]

        if isinstance(body, Exception):
            raise body
        if callable(body):
            body = body(params, json)
        return FakeResponse(status, body, url)

    def calls_to(self, method, path):
        return [c for c in self.calls if c.method == method and c.path == path]

    def close(self):
        self.closed = True


def message(id, sender=1, receiver=2, content="hello", conversation_id=5):
    return {
        "id": id,
        "conversationId": conversation_id,
        "senderId": sender,
        "receiverId": receiver,
        "content": content,
        "createdAt": "2025-03-12T10:15:00Z",
        "updatedAt": "2025-03-12T10:15:00Z",
        "isRead": False,
        "listingId": None,
    }


def page(content, number=0, last=True, size=20):
    return {
        "content": content,
        "number": number,
        "size": size,
        "totalElements": len(content),
        "totalPages": 1,
        "last": last,
    }


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def storage(tmp_path):
    s = LocalStorage(str(tmp_path / "device.sqlite3"))
    yield s
    s.close()


@pytest.fixture
def sessions(storage):
    return SessionManager(storage)


@pytest.fixture
def signed_in(sessions):
    return sessions.save("tok-123", StoredUser(email=ME["email"], name=ME["name"]))


@pytest.fixture
def api(http, sessions):
    return ApiClient(base_url=BASE_URL, session=http, token_provider=sessions.current_token)


@pytest.fixture
def chat(api):
    return ChatService(api)


@pytest.fixture
def resolver(http, sessions, api):
    http.add("GET", "/api/user/by-email", ME)
    return IdentityResolver(sessions, UserService(api))
