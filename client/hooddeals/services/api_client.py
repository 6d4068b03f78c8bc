# client/hooddeals/services/api_client.py

import threading
import weakref
from typing import Any, Callable, Dict, Optional

import requests

from hooddeals.core.cancellation import CancelToken
from hooddeals.core.config_loader import settings
from hooddeals.core.errors import ApiError, MalformedResponseError, NetworkError
from hooddeals.core.logger import excerpt, get_logger
from hooddeals.core.security import bearer_header

log = get_logger("api")

TokenProvider = Callable[[], Optional[str]]


class ApiClient:
    """
    Thin JSON-over-HTTPS client for the Hood Deals backend.

    Every call carries a bounded timeout. When a CancelToken is given, the
    request is refused if already cancelled, and cancelling while it is in
    flight returns the caller at once with RequestCancelled. The blocked
    socket is left to a daemon worker that ends by the read timeout at the
    latest; its result is dropped. Cancelling also closes the HTTP session
    so no pooled connection outlives the screen.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
        timeout=None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.token_provider = token_provider
        self.session = session or requests.Session()
        self.timeout = timeout or settings.request_timeout
        self._watched_tokens = weakref.WeakSet()
        self._watch_lock = threading.Lock()

    def _headers(self, authenticated: bool) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if authenticated and self.token_provider:
            headers.update(bearer_header(self.token_provider()))
        return headers

    def _watch(self, cancel_token: CancelToken) -> None:
        """Close this client's session when the token fires, once per token."""
        with self._watch_lock:
            if cancel_token in self._watched_tokens:
                return
            self._watched_tokens.add(cancel_token)
        cancel_token.on_cancel(self.close)

    def _send(self, cancel_token: Optional[CancelToken], method: str, url: str, **kwargs):
        if cancel_token is None:
            return self.session.request(method, url, **kwargs)

        done = threading.Event()
        outcome: Dict[str, Any] = {}

        def _worker():
            try:
                outcome["response"] = self.session.request(method, url, **kwargs)
            except Exception as e:
                outcome["error"] = e
            finally:
                done.set()

        unregister = cancel_token.on_cancel(done.set)
        try:
            threading.Thread(target=_worker, name="hooddeals-http", daemon=True).start()
            done.wait()
        finally:
            unregister()

        if cancel_token.cancelled:
            log.debug("%s %s abandoned after cancel", method, url)
            cancel_token.raise_if_cancelled()
        if "error" in outcome:
            raise outcome["error"]
        return outcome["response"]

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        authenticated: bool = True,
        cancel_token: Optional[CancelToken] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
            self._watch(cancel_token)

        log.debug("%s %s params=%s", method, url, params)
        try:
            response = self._send(
                cancel_token,
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(authenticated),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            log.warning("%s %s timed out: %s", method, url, e)
            raise NetworkError(f"Request timed out: {method} {path}") from e
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise NetworkError("Network error or backend not reachable") from e

        body = self._decode(response)

        if not response.ok:
            log.warning(
                "%s %s -> %s body=%s", method, url, response.status_code, excerpt(body)
            )
            raise ApiError(
                f"{method} {path} failed: {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        return body

    @staticmethod
    def _decode(response) -> Any:
        text = response.text
        if not text:
            return None
        try:
            return response.json()
        except ValueError:
            if response.ok:
                raise MalformedResponseError(
                    f"Expected JSON from {response.url}, got: {excerpt(text, 120)}"
                )
            return text

    # ------------------------------------------------------------------
    # Verb helpers
    # ------------------------------------------------------------------
    def get(self, path: str, params=None, **kwargs) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, json=None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def patch(self, path: str, json=None, **kwargs) -> Any:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

    def close(self):
        self.session.close()
