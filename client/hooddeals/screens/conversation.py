# client/hooddeals/screens/conversation.py

import threading
from typing import List, Optional, Set

from hooddeals.core.cancellation import CancelToken
from hooddeals.core.config_loader import settings
from hooddeals.core.errors import FormValidationError, HoodDealsError, RequestCancelled
from hooddeals.core.logger import get_logger
from hooddeals.models.conversation_models import (
    Conversation,
    ConversationScreenOut,
    Message,
    MessageView,
)
from hooddeals.screens.identity import IdentityResolver
from hooddeals.screens.state import LoadState, ScreenState
from hooddeals.services.chat_service import ChatService

log = get_logger("conversation")

PARTICIPANTS_UNKNOWN = "Cannot send yet: conversation participants are unknown."


class ConversationViewModel(ScreenState):
    """
    State of one open conversation screen.

    Messages are kept in arrival order (pages in request order, then sent
    messages) and keyed by id, so overlapping pages never render twice.
    The counterpart is taken from the Conversation entity, never inferred
    from message content.
    """

    def __init__(
        self,
        conversation_id: int,
        resolver: IdentityResolver,
        chat: ChatService,
        conversation: Optional[Conversation] = None,
        other_user_id: Optional[int] = None,
        page_size: int = settings.MESSAGE_PAGE_SIZE,
    ):
        super().__init__()
        self.conversation_id = conversation_id
        self.resolver = resolver
        self.chat = chat
        self.conversation = conversation
        self.page_size = page_size

        self.my_user_id: Optional[int] = None
        self.other_user_id: Optional[int] = other_user_id

        self.messages: List[Message] = []
        self._ids: Set[int] = set()
        self.page = 0
        self.has_more = True
        self.draft = ""

        self.cancel_token = CancelToken()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def open(self) -> None:
        """Screen entry: resolve identity, then counterpart, then page 0."""
        with self._lock:
            self._begin()
        self.resolver.reset()

        try:
            self.my_user_id = self.resolver.resolve(self.cancel_token)
            self._resolve_counterpart()
        except RequestCancelled:
            log.debug("conversation %s closed during open", self.conversation_id)
            return
        except HoodDealsError as e:
            log.error("conversation %s: identity failed: %s", self.conversation_id, e)
            with self._lock:
                self._fail(e)
            return

        self._load_page(0, reset=True)

    def refresh(self) -> None:
        if self.my_user_id is None:
            self.open()
            return
        with self._lock:
            self._begin()
        self._load_page(0, reset=True)

    def on_end_reached(self) -> bool:
        """Load the next page. Returns False when nothing was requested."""
        with self._lock:
            if self.state != LoadState.SUCCESS or not self.has_more:
                return False
            self._begin()
            next_page = self.page + 1

        self._load_page(next_page, reset=False)
        return True

    def _resolve_counterpart(self) -> None:
        if self.other_user_id is not None:
            return

        conv = self.conversation
        if conv is None:
            try:
                conv = self.chat.find_conversation(
                    self.my_user_id, self.conversation_id, cancel_token=self.cancel_token
                )
            except RequestCancelled:
                raise
            except HoodDealsError as e:
                log.warning("conversation %s lookup failed: %s", self.conversation_id, e)
                return
            self.conversation = conv

        if conv is None:
            log.warning(
                "conversation %s not found for user %s", self.conversation_id, self.my_user_id
            )
            return
        self.other_user_id = conv.counterpart_of(self.my_user_id)

    def _load_page(self, page: int, reset: bool) -> None:
        try:
            result = self.chat.list_messages(
                self.conversation_id, page, self.page_size, cancel_token=self.cancel_token
            )
        except RequestCancelled:
            log.debug("conversation %s page %s discarded", self.conversation_id, page)
            return
        except HoodDealsError as e:
            log.error("Failed to load messages for %s: %s", self.conversation_id, e)
            with self._lock:
                self._fail(e)
            return

        with self._lock:
            if reset:
                self.messages = []
                self._ids = set()
            self._merge(result.content)
            self.page = result.number
            self.has_more = not result.last
            self._succeed()

    def _merge(self, incoming: List[Message]) -> int:
        added = 0
        for msg in incoming:
            if msg.id in self._ids:
                continue
            self._ids.add(msg.id)
            self.messages.append(msg)
            added += 1
        return added

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------
    def send(self, content: str) -> Optional[Message]:
        """
        Send and append the server's echo. Nothing is shown before the
        server acknowledges; on failure the draft is kept for resubmission.
        """
        content = (content or "").strip()
        if not content:
            return None

        if self.my_user_id is None or self.other_user_id is None:
            self.draft = content
            self.error = PARTICIPANTS_UNKNOWN
            raise FormValidationError(PARTICIPANTS_UNKNOWN, field="receiverId")

        self.draft = ""
        try:
            msg = self.chat.send_message(
                self.conversation_id,
                self.my_user_id,
                self.other_user_id,
                content,
                cancel_token=self.cancel_token,
            )
        except HoodDealsError as e:
            self.draft = content
            if not isinstance(e, RequestCancelled):
                log.error("Failed to send message: %s", e)
                self.error = e.message
            raise

        with self._lock:
            self._merge([msg])
            self.error = None
        return msg

    def mark_read(self, message_id: int, read: bool = True) -> Message:
        updated = self.chat.mark_read(
            self.conversation_id, message_id, read, cancel_token=self.cancel_token
        )
        with self._lock:
            self.messages = [updated if m.id == updated.id else m for m in self.messages]
        return updated

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------
    def is_mine(self, msg: Message) -> bool:
        return self.my_user_id is not None and msg.sender_id == self.my_user_id

    def items(self) -> List[MessageView]:
        with self._lock:
            return [
                MessageView(**m.model_dump(), mine=self.is_mine(m))
                for m in self.messages
            ]

    def snapshot(self) -> ConversationScreenOut:
        return ConversationScreenOut(
            conversation_id=self.conversation_id,
            my_user_id=self.my_user_id,
            other_user_id=self.other_user_id,
            state=self.state.value,
            error=self.error,
            page=self.page,
            has_more=self.has_more,
            draft=self.draft,
            messages=self.items(),
        )

    def close(self) -> None:
        self.cancel_token.cancel()
