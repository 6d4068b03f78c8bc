# client/hooddeals/api/routes_conversation.py

import threading
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException

from hooddeals.api import common
from hooddeals.core.errors import HoodDealsError
from hooddeals.core.logger import get_logger
from hooddeals.models.conversation_models import (
    Conversation,
    ConversationScreenOut,
    MessageView,
    SendMessageIn,
    StartConversationIn,
)
from hooddeals.screens.conversation import ConversationViewModel
from hooddeals.screens.state import LoadState
from hooddeals.services.chat_service import ChatService

router = APIRouter(prefix="/conversations", tags=["conversations"])
log = get_logger("routes.conversation")

# open conversation screens, keyed by conversation id
_screens: Dict[int, ConversationViewModel] = {}
_screens_lock = threading.Lock()


# --------------------------
# Utils
# --------------------------
def _new_screen(
    conversation_id: int,
    conversation: Optional[Conversation] = None,
    other_user_id: Optional[int] = None,
) -> ConversationViewModel:
    client = common.screen_client()
    return ConversationViewModel(
        conversation_id,
        common.new_resolver(client),
        ChatService(client),
        conversation=conversation,
        other_user_id=other_user_id,
    )


def _get_screen(conversation_id: int) -> ConversationViewModel:
    with _screens_lock:
        vm = _screens.get(conversation_id)
    if vm is None:
        raise HTTPException(404, "Conversation screen is not open")
    return vm


def close_all_screens():
    with _screens_lock:
        screens = list(_screens.values())
        _screens.clear()
    for vm in screens:
        vm.close()


# --------------------------
# Start (or reuse) a conversation about a listing
# --------------------------
@router.post("", response_model=Conversation)
def start_conversation(data: StartConversationIn):
    resolver = common.new_resolver()
    try:
        me = resolver.resolve()
        if me == data.seller_id:
            raise HTTPException(400, "You cannot message yourself")
        conv = common.chat_service.create_conversation(me, data.seller_id, data.listing_id)
    except HoodDealsError as e:
        raise common.to_http_error(e)

    with _screens_lock:
        if conv.id not in _screens:
            _screens[conv.id] = _new_screen(conv.id, conversation=conv)
    return conv


# --------------------------
# Open / refresh the conversation screen
# --------------------------
@router.get("/{conversation_id}", response_model=ConversationScreenOut)
def open_conversation(
    conversation_id: int,
    other_user_id: Optional[int] = None,
    refresh: bool = False,
):
    with _screens_lock:
        vm = _screens.get(conversation_id)
        created = vm is None
        if created:
            vm = _new_screen(conversation_id, other_user_id=other_user_id)
            _screens[conversation_id] = vm

    if created or vm.state == LoadState.IDLE:
        vm.open()
    elif refresh:
        vm.refresh()

    return vm.snapshot()


@router.post("/{conversation_id}/more", response_model=ConversationScreenOut)
def load_more(conversation_id: int):
    vm = _get_screen(conversation_id)
    vm.on_end_reached()
    return vm.snapshot()


# --------------------------
# Send
# --------------------------
@router.post("/{conversation_id}/messages", response_model=ConversationScreenOut)
def send_message(conversation_id: int, data: SendMessageIn):
    vm = _get_screen(conversation_id)
    if not data.content.strip():
        raise HTTPException(400, "Message is required")
    try:
        vm.send(data.content)
    except HoodDealsError as e:
        raise common.to_http_error(e)
    return vm.snapshot()


# --------------------------
# Read state
# --------------------------
def _set_read(conversation_id: int, message_id: int, read: bool) -> MessageView:
    vm = _get_screen(conversation_id)
    try:
        msg = vm.mark_read(message_id, read)
    except HoodDealsError as e:
        raise common.to_http_error(e)
    return MessageView(**msg.model_dump(), mine=vm.is_mine(msg))


@router.patch("/{conversation_id}/messages/{message_id}/read", response_model=MessageView)
def mark_read(conversation_id: int, message_id: int):
    return _set_read(conversation_id, message_id, True)


@router.patch("/{conversation_id}/messages/{message_id}/unread", response_model=MessageView)
def mark_unread(conversation_id: int, message_id: int):
    return _set_read(conversation_id, message_id, False)


# --------------------------
# Close the screen
# --------------------------
@router.delete("/{conversation_id}")
def close_conversation(conversation_id: int):
    with _screens_lock:
        vm = _screens.pop(conversation_id, None)
    if vm is None:
        return {"ok": True, "closed": False}
    vm.close()
    log.debug("conversation screen %s closed", conversation_id)
    return {"ok": True, "closed": True}
