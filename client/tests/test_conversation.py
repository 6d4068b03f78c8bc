import pytest

from hooddeals.core.errors import FormValidationError
from hooddeals.models.conversation_models import Conversation
from hooddeals.screens.conversation import PARTICIPANTS_UNKNOWN, ConversationViewModel
from hooddeals.screens.state import LoadState

from conftest import message, page

CONV = {"id": 5, "user1Id": 1, "user2Id": 2, "listingId": None,
        "lastMessageAt": None, "createdAt": None}
MESSAGES = "/conversations/5/messages"


def _pages(*pages):
    return lambda params, _: pages[params["page"]]


@pytest.fixture
def vm(resolver, chat, signed_in):
    return ConversationViewModel(5, resolver, chat, conversation=Conversation.model_validate(CONV))


def test_end_reached_requests_next_page_and_concatenates(http, vm):
    first = [message(1), message(2, sender=2, receiver=1)]
    second = [message(3), message(4)]
    http.add("GET", MESSAGES, _pages(page(first, 0, last=False), page(second, 1, last=True)))

    vm.open()
    assert vm.state == LoadState.SUCCESS
    assert vm.has_more is True

    assert vm.on_end_reached() is True

    calls = http.calls_to("GET", MESSAGES)
    assert [c.params for c in calls] == [{"page": 0, "size": 20}, {"page": 1, "size": 20}]
    assert [m.id for m in vm.messages] == [1, 2, 3, 4]
    assert vm.page == 1
    assert vm.has_more is False

    # last page reached: nothing more is requested
    assert vm.on_end_reached() is False
    assert len(http.calls_to("GET", MESSAGES)) == 2


def test_overlapping_pages_are_not_rendered_twice(http, vm):
    http.add("GET", MESSAGES, _pages(
        page([message(1), message(2)], 0, last=False),
        page([message(2), message(3)], 1, last=True),
    ))
    vm.open()
    vm.on_end_reached()
    assert [m.id for m in vm.messages] == [1, 2, 3]


def test_refresh_replaces_the_list(http, vm):
    http.add("GET", MESSAGES, page([message(1)], 0, last=False))
    http.add("GET", MESSAGES, page([message(8)], 0, last=True))
    vm.open()
    vm.refresh()
    assert [m.id for m in vm.messages] == [8]


def test_failed_page_keeps_what_was_loaded(http, vm):
    http.add("GET", MESSAGES, _pages(page([message(1)], 0, last=False)))
    vm.open()

    http.routes[("GET", MESSAGES)] = [(500, {"error": "db down"})]
    vm.on_end_reached()

    assert vm.state == LoadState.ERROR
    assert vm.error
    assert [m.id for m in vm.messages] == [1]
    # error state is left only by re-entering the screen
    assert vm.on_end_reached() is False


def test_send_appends_server_echo_as_mine(http, vm):
    http.add("GET", MESSAGES, page([message(1, sender=2, receiver=1)], 0, last=True))
    echo = {"id": 99, "conversationId": 5, "senderId": 1, "receiverId": 2,
            "content": "hi", "createdAt": "2025-03-12T11:00:00Z", "isRead": False}
    http.add("POST", MESSAGES, echo)
    vm.open()

    sent = vm.send("  hi ")

    assert sent.id == 99
    assert http.calls_to("POST", MESSAGES)[0].json == {
        "senderId": 1, "receiverId": 2, "content": "hi",
    }
    items = vm.items()
    assert items[-1].id == 99
    assert items[-1].content == "hi"
    assert items[-1].mine is True
    assert items[0].mine is False
    assert vm.draft == ""


def test_send_failure_keeps_draft(http, vm):
    http.add("GET", MESSAGES, page([], 0, last=True))
    http.add("POST", MESSAGES, {"error": "nope"}, status=500)
    vm.open()

    with pytest.raises(Exception):
        vm.send("are you there?")

    assert vm.draft == "are you there?"
    assert vm.error
    assert vm.messages == []


def test_empty_send_is_a_noop(http, vm):
    http.add("GET", MESSAGES, page([], 0, last=True))
    vm.open()
    assert vm.send("   ") is None
    assert http.calls_to("POST", MESSAGES) == []


def test_counterpart_comes_from_conversation_entity(http, resolver, chat, signed_in):
    # first message is the user talking to themself; it must not decide the counterpart
    http.add("GET", "/api/conversations", page([CONV]))
    http.add("GET", MESSAGES, page([message(1, sender=1, receiver=1)], 0, last=True))

    vm = ConversationViewModel(5, resolver, chat)
    vm.open()

    assert vm.my_user_id == 1
    assert vm.other_user_id == 2


def test_self_conversation_counterpart_is_self(http, resolver, chat, signed_in):
    conv = Conversation.model_validate(dict(CONV, user2Id=1))
    http.add("GET", MESSAGES, page([], 0, last=True))
    vm = ConversationViewModel(5, resolver, chat, conversation=conv)
    vm.open()
    assert vm.other_user_id == 1


def test_send_without_counterpart_never_hits_network(http, resolver, chat, signed_in):
    http.add("GET", "/api/conversations", page([]))
    http.add("GET", MESSAGES, page([message(1)], 0, last=True))
    vm = ConversationViewModel(5, resolver, chat)
    vm.open()

    with pytest.raises(FormValidationError):
        vm.send("hello?")

    assert vm.error == PARTICIPANTS_UNKNOWN
    assert vm.draft == "hello?"
    assert http.calls_to("POST", MESSAGES) == []


def test_identity_failure_halts_message_fetch(http, resolver, chat, sessions):
    vm = ConversationViewModel(5, resolver, chat, other_user_id=2)
    vm.open()

    assert vm.state == LoadState.ERROR
    assert "sign in" in vm.error
    assert http.calls_to("GET", MESSAGES) == []


def test_close_cancels_and_discards(http, vm):
    http.add("GET", MESSAGES, page([message(1)], 0, last=False))
    vm.open()

    vm.close()

    assert http.closed is True
    before = len(http.calls)
    vm.on_end_reached()
    # the page request is refused, the list and page are untouched
    assert len(http.calls) == before
    assert [m.id for m in vm.messages] == [1]
    assert vm.page == 0


def test_mark_read_replaces_message(http, vm):
    http.add("GET", MESSAGES, page([message(7, sender=2, receiver=1)], 0, last=True))
    http.add("PATCH", "/conversations/5/messages/7/read", dict(message(7, sender=2, receiver=1), isRead=True))
    vm.open()

    vm.mark_read(7, True)

    assert vm.messages[0].is_read is True
    snap = vm.snapshot()
    assert snap.state == "success"
    assert snap.messages[0].mine is False
