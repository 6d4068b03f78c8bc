# client/hooddeals/services/chat_service.py

from typing import Any, Optional

from pydantic import ValidationError

from hooddeals.core.cancellation import CancelToken
from hooddeals.core.config_loader import settings
from hooddeals.core.errors import ApiError, MalformedResponseError
from hooddeals.core.logger import get_logger
from hooddeals.models.conversation_models import (
    Conversation,
    ConversationCreate,
    Message,
    MessageCreate,
    Page,
)
from hooddeals.services.api_client import ApiClient

log = get_logger("chat")


def _parse(model, raw: Any, what: str):
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected {what} payload: {raw!r}") from e


class ChatService:
    def __init__(self, client: ApiClient):
        self.client = client

    # --------------------------
    # Conversations
    # --------------------------
    def list_conversations(
        self,
        user_id: int,
        page: int = 0,
        size: int = settings.INBOX_PAGE_SIZE,
        cancel_token: Optional[CancelToken] = None,
    ) -> Page[Conversation]:
        """
        Conversations the user takes part in. Some deployments mount the
        resource under /api, others at the root; /api is tried first.
        """
        params = {"userId": user_id, "page": page, "size": size}
        try:
            raw = self.client.get("/api/conversations", params=params, cancel_token=cancel_token)
        except ApiError as e:
            if e.status_code != 404:
                raise
            log.debug("/api/conversations not found, falling back to /conversations")
            raw = self.client.get("/conversations", params=params, cancel_token=cancel_token)

        if isinstance(raw, list):
            return Page[Conversation](
                content=[_parse(Conversation, c, "conversation") for c in raw],
                number=page,
                size=size,
                last=True,
            )
        return _parse(Page[Conversation], raw or {}, "conversation page")

    def find_conversation(
        self,
        user_id: int,
        conversation_id: int,
        size: int = settings.INBOX_PAGE_SIZE,
        cancel_token: Optional[CancelToken] = None,
    ) -> Optional[Conversation]:
        page = 0
        while True:
            result = self.list_conversations(user_id, page, size, cancel_token=cancel_token)
            for conv in result.content:
                if conv.id == conversation_id:
                    return conv
            if result.last or not result.content:
                return None
            page = result.number + 1

    def create_conversation(
        self, user1_id: int, user2_id: int, listing_id: Optional[int] = None
    ) -> Conversation:
        body = ConversationCreate(user1_id=user1_id, user2_id=user2_id, listing_id=listing_id)
        raw = self.client.post("/conversations", json=body.model_dump(by_alias=True))
        return _parse(Conversation, raw, "conversation")

    # --------------------------
    # Messages
    # --------------------------
    def list_messages(
        self,
        conversation_id: int,
        page: int = 0,
        size: int = settings.MESSAGE_PAGE_SIZE,
        cancel_token: Optional[CancelToken] = None,
    ) -> Page[Message]:
        raw = self.client.get(
            f"/conversations/{conversation_id}/messages",
            params={"page": page, "size": size},
            cancel_token=cancel_token,
        )
        return _parse(Page[Message], raw or {}, "message page")

    def send_message(
        self,
        conversation_id: int,
        sender_id: int,
        receiver_id: int,
        content: str,
        cancel_token: Optional[CancelToken] = None,
    ) -> Message:
        body = MessageCreate(sender_id=sender_id, receiver_id=receiver_id, content=content)
        raw = self.client.post(
            f"/conversations/{conversation_id}/messages",
            json=body.model_dump(by_alias=True),
            cancel_token=cancel_token,
        )
        return _parse(Message, raw, "message")

    def mark_read(
        self,
        conversation_id: int,
        message_id: int,
        read: bool,
        cancel_token: Optional[CancelToken] = None,
    ) -> Message:
        path = "read" if read else "unread"
        raw = self.client.patch(
            f"/conversations/{conversation_id}/messages/{message_id}/{path}",
            cancel_token=cancel_token,
        )
        return _parse(Message, raw, "message")
