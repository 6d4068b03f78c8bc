# client/hooddeals/services/auth_service.py

from typing import Any

from pydantic import ValidationError

from hooddeals.core.errors import ApiError, MalformedResponseError
from hooddeals.core.logger import get_logger
from hooddeals.models.user_models import AuthResult, GoogleProfileIn
from hooddeals.services.api_client import ApiClient

log = get_logger("auth")


class AuthService:
    """
    Token issuance endpoints. None of these calls carry an Authorization
    header; each returns {token, user} for the signed-in account.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def _exchange(self, path: str, body: dict, fallback_error: str) -> AuthResult:
        try:
            raw = self.client.post(path, json=body, authenticated=False)
        except ApiError as e:
            raise ApiError(e.server_error or fallback_error, e.status_code, e.body) from e

        if not isinstance(raw, dict) or not raw.get("token"):
            err = raw.get("error") if isinstance(raw, dict) else None
            raise ApiError(err or fallback_error, status_code=401, body=raw)
        try:
            return AuthResult.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected auth payload: {raw!r}") from e

    def login(self, email: str, password: str) -> AuthResult:
        result = self._exchange(
            "/api/auth/login",
            {"email": email, "password": password},
            "Invalid credentials",
        )
        log.info("login succeeded for %s", email)
        return result

    def signup(self, email: str, password: str, name: str) -> AuthResult:
        return self._exchange(
            "/api/auth/signup",
            {"email": email, "password": password, "name": name},
            "Sign up failed",
        )

    def google_exchange(self, profile: GoogleProfileIn) -> AuthResult:
        return self._exchange(
            "/api/auth/google",
            {
                "id": profile.id,
                "email": profile.email,
                "name": profile.name,
                "picture": profile.picture,
            },
            "Failed to sign in with Google",
        )

    def github_exchange(self, code: str, platform: str = "web") -> AuthResult:
        return self._exchange(
            "/api/auth/github",
            {"code": code, "platform": platform},
            "Failed to authenticate with GitHub",
        )
