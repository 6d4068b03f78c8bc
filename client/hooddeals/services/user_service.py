# client/hooddeals/services/user_service.py

from typing import Optional

from pydantic import ValidationError

from hooddeals.core.cancellation import CancelToken
from hooddeals.core.errors import MalformedResponseError
from hooddeals.models.user_models import User
from hooddeals.services.api_client import ApiClient


class UserService:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_user_by_email(
        self, email: str, cancel_token: Optional[CancelToken] = None
    ) -> User:
        raw = self.client.get(
            "/api/user/by-email",
            params={"email": email},
            cancel_token=cancel_token,
        )
        try:
            return User.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected user payload: {raw!r}") from e
