# client/hooddeals/screens/inbox.py

from typing import List, Optional

from hooddeals.core.cancellation import CancelToken
from hooddeals.core.config_loader import settings
from hooddeals.core.errors import HoodDealsError, RequestCancelled
from hooddeals.core.logger import get_logger
from hooddeals.models.conversation_models import Conversation, InboxOut, InboxRow
from hooddeals.screens.identity import IdentityResolver
from hooddeals.screens.state import ScreenState
from hooddeals.services.chat_service import ChatService
from hooddeals.utils.time_utils import format_timestamp

log = get_logger("inbox")


class InboxViewModel(ScreenState):
    def __init__(
        self,
        resolver: IdentityResolver,
        chat: ChatService,
        page_size: int = settings.INBOX_PAGE_SIZE,
        cancel_token: Optional[CancelToken] = None,
    ):
        super().__init__()
        self.resolver = resolver
        self.chat = chat
        self.page_size = page_size
        self.cancel_token = cancel_token or CancelToken()
        self.my_user_id: Optional[int] = None
        self.conversations: List[Conversation] = []

    def load(self) -> None:
        self._begin()
        self.resolver.reset()
        try:
            self.my_user_id = self.resolver.resolve(self.cancel_token)
            page = self.chat.list_conversations(
                self.my_user_id, 0, self.page_size, cancel_token=self.cancel_token
            )
        except RequestCancelled:
            return
        except HoodDealsError as e:
            log.error("Error fetching conversations: %s", e)
            self._fail(e)
            return

        self.conversations = page.content
        self._succeed()

    def rows(self) -> List[InboxRow]:
        return [
            InboxRow(
                id=c.id,
                title=f"Conversation #{c.id}",
                listing_id=c.listing_id,
                other_user_id=(
                    c.counterpart_of(self.my_user_id) if self.my_user_id is not None else None
                ),
                last_message_at=c.last_message_at,
                last_message_display=format_timestamp(c.last_message_at),
            )
            for c in self.conversations
        ]

    def snapshot(self) -> InboxOut:
        return InboxOut(
            my_user_id=self.my_user_id,
            state=self.state.value,
            error=self.error,
            conversations=self.rows(),
        )
