# client/hooddeals/core/errors.py

from typing import Any, Optional


class HoodDealsError(Exception):
    """Base class for every failure a screen can surface to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(HoodDealsError):
    """Transport failure: DNS, refused connection, timeout."""


class ApiError(HoodDealsError):
    def __init__(self, message: str, status_code: int, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def server_error(self) -> Optional[str]:
        if isinstance(self.body, dict):
            err = self.body.get("error") or self.body.get("message")
            if isinstance(err, str) and err:
                return err
        return None


class MalformedResponseError(HoodDealsError):
    pass


class RequestCancelled(HoodDealsError):
    def __init__(self, message: str = "Request cancelled"):
        super().__init__(message)


class IdentityError(HoodDealsError):
    """Local identity is missing, expired or unknown to the backend."""


class FormValidationError(HoodDealsError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
