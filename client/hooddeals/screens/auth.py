# client/hooddeals/screens/auth.py

from hooddeals.core.errors import FormValidationError
from hooddeals.core.logger import get_logger
from hooddeals.core.session import Session, SessionManager
from hooddeals.models.user_models import (
    AuthResult,
    GithubCodeIn,
    GoogleProfileIn,
    LoginIn,
    SignUpIn,
)
from hooddeals.services.auth_service import AuthService
from hooddeals.utils.validators import require, validate_email, validate_new_password

log = get_logger("auth_screen")


class AuthFlow:
    """Login, sign-up and OAuth exchanges; each success replaces the stored session."""

    def __init__(self, sessions: SessionManager, auth: AuthService):
        self.sessions = sessions
        self.auth = auth

    def _persist(self, result: AuthResult) -> Session:
        session = self.sessions.save(result.token, result.user)
        log.info("signed in as %s", result.user.email or result.user.name)
        return session

    def login(self, data: LoginIn) -> Session:
        if not data.email.strip() or not data.password:
            raise FormValidationError("Please enter both email and password")
        result = self.auth.login(data.email.strip(), data.password)
        return self._persist(result)

    def sign_up(self, data: SignUpIn) -> Session:
        name = require(data.name, "Please enter your name.", "name")
        email = validate_email(data.email)
        password = validate_new_password(data.password, data.confirm_password)
        result = self.auth.signup(email, password, name)
        return self._persist(result)

    def google(self, profile: GoogleProfileIn) -> Session:
        return self._persist(self.auth.google_exchange(profile))

    def github(self, data: GithubCodeIn) -> Session:
        code = require(data.code, "No authorization code received", "code")
        return self._persist(self.auth.github_exchange(code, data.platform))
