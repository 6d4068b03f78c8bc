# client/hooddeals/api/routes_inbox.py

from fastapi import APIRouter

from hooddeals.api import common
from hooddeals.models.conversation_models import InboxOut
from hooddeals.screens.inbox import InboxViewModel

router = APIRouter(prefix="/inbox", tags=["inbox"])


@router.get("", response_model=InboxOut)
def inbox():
    """
    Re-resolves identity on every call, the way focusing the inbox tab does.
    Failures come back as state="error" with a message for the screen.
    """
    vm = InboxViewModel(common.new_resolver(), common.chat_service)
    vm.load()
    return vm.snapshot()
