from hooddeals.services.chat_service import ChatService

from conftest import message, page

CONV = {"id": 5, "user1Id": 1, "user2Id": 2, "listingId": 9,
        "lastMessageAt": None, "createdAt": "2025-03-01T00:00:00Z"}


def test_list_conversations_prefers_api_prefix(http, chat):
    http.add("GET", "/api/conversations", page([CONV]))

    result = chat.list_conversations(1)

    assert [c.id for c in result.content] == [5]
    call = http.calls[0]
    assert call.path == "/api/conversations"
    assert call.params == {"userId": 1, "page": 0, "size": 20}


def test_list_conversations_falls_back_on_404(http, chat):
    http.add("GET", "/api/conversations", {"error": "no route"}, status=404)
    http.add("GET", "/conversations", [CONV])

    result = chat.list_conversations(1)

    assert [c.path for c in http.calls] == ["/api/conversations", "/conversations"]
    assert result.content[0].listing_id == 9
    assert result.last is True


def test_find_conversation_walks_pages(http, chat):
    other = dict(CONV, id=4)
    http.add("GET", "/api/conversations",
             lambda params, _: page([other], 0, last=False) if params["page"] == 0
             else page([CONV], 1, last=True))

    conv = chat.find_conversation(1, 5)

    assert conv.id == 5
    assert [c.params["page"] for c in http.calls] == [0, 1]


def test_find_conversation_missing(http, chat):
    http.add("GET", "/api/conversations", page([CONV]))
    assert chat.find_conversation(1, 99) is None


def test_create_conversation_body(http, chat):
    http.add("POST", "/conversations", CONV)
    conv = chat.create_conversation(1, 2, 9)
    assert conv.id == 5
    assert http.calls[0].json == {"user1Id": 1, "user2Id": 2, "listingId": 9}


def test_list_messages_and_send(http, chat):
    http.add("GET", "/conversations/5/messages", page([message(1)], 0, last=False))
    http.add("POST", "/conversations/5/messages", message(99, content="hi"))

    result = chat.list_messages(5, page=0, size=20)
    assert result.last is False
    assert result.content[0].sender_id == 1
    assert http.calls[0].params == {"page": 0, "size": 20}

    sent = chat.send_message(5, 1, 2, "hi")
    assert sent.id == 99
    assert http.calls[1].json == {"senderId": 1, "receiverId": 2, "content": "hi"}


def test_mark_read_and_unread_paths(http, chat):
    http.add("PATCH", "/conversations/5/messages/7/read", dict(message(7), isRead=True))
    http.add("PATCH", "/conversations/5/messages/7/unread", message(7))

    assert chat.mark_read(5, 7, True).is_read is True
    assert chat.mark_read(5, 7, False).is_read is False


def test_service_can_be_built_without_token(http):
    from hooddeals.services.api_client import ApiClient

    svc = ChatService(ApiClient(base_url="https://api.test", session=http))
    http.add("GET", "/conversations/1/messages", page([]))
    svc.list_messages(1)
    assert "Authorization" not in http.calls[0].headers
