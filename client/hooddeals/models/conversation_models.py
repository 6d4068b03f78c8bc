# client/hooddeals/models/conversation_models.py

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class _CamelModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --------------------------
# Backend entities
# --------------------------
class Conversation(_CamelModel):
    id: int
    user1_id: int = Field(alias="user1Id")
    user2_id: int = Field(alias="user2Id")
    listing_id: Optional[int] = Field(default=None, alias="listingId")
    last_message_at: Optional[str] = Field(default=None, alias="lastMessageAt")
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    def counterpart_of(self, user_id: int) -> Optional[int]:
        """The other participant; the user themself for a self-conversation."""
        if self.user1_id == user_id:
            return self.user2_id
        if self.user2_id == user_id:
            return self.user1_id
        return None


class Message(_CamelModel):
    id: int
    conversation_id: int = Field(alias="conversationId")
    sender_id: int = Field(alias="senderId")
    receiver_id: int = Field(alias="receiverId")
    content: str
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    is_read: bool = Field(default=False, alias="isRead")
    listing_id: Optional[int] = Field(default=None, alias="listingId")


class Page(_CamelModel, Generic[T]):
    content: List[T] = []
    number: int = 0
    size: int = 0
    total_elements: Optional[int] = Field(default=None, alias="totalElements")
    total_pages: Optional[int] = Field(default=None, alias="totalPages")
    last: bool = True


# --------------------------
# Request bodies
# --------------------------
class ConversationCreate(_CamelModel):
    user1_id: int = Field(alias="user1Id")
    user2_id: int = Field(alias="user2Id")
    listing_id: Optional[int] = Field(default=None, alias="listingId")


class MessageCreate(_CamelModel):
    sender_id: int = Field(alias="senderId")
    receiver_id: int = Field(alias="receiverId")
    content: str


# --------------------------
# Gateway inputs
# --------------------------
class StartConversationIn(_CamelModel):
    seller_id: int = Field(alias="sellerId")
    listing_id: Optional[int] = Field(default=None, alias="listingId")


class SendMessageIn(BaseModel):
    content: str = ""


# --------------------------
# Screen outputs
# --------------------------
class MessageView(Message):
    mine: bool = False


class ConversationScreenOut(_CamelModel):
    conversation_id: int = Field(alias="conversationId")
    my_user_id: Optional[int] = Field(default=None, alias="myUserId")
    other_user_id: Optional[int] = Field(default=None, alias="otherUserId")
    state: str
    error: Optional[str] = None
    page: int = 0
    has_more: bool = Field(default=True, alias="hasMore")
    draft: str = ""
    messages: List[MessageView] = []


class InboxRow(_CamelModel):
    id: int
    title: str
    listing_id: Optional[int] = Field(default=None, alias="listingId")
    other_user_id: Optional[int] = Field(default=None, alias="otherUserId")
    last_message_at: Optional[str] = Field(default=None, alias="lastMessageAt")
    last_message_display: str = Field(alias="lastMessageDisplay")


class InboxOut(_CamelModel):
    my_user_id: Optional[int] = Field(default=None, alias="myUserId")
    state: str
    error: Optional[str] = None
    conversations: List[InboxRow] = []
