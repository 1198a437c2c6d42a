import pytest
from socketio.exceptions import ConnectionRefusedError

from social_toolkit.realtime.socket_manager import SocketManager, extract_token


@pytest.fixture
def manager(toolkit) -> SocketManager:
    return toolkit.socket_manager()


@pytest.fixture
async def alice(make_user):
    return await make_user("alice")


@pytest.fixture
async def bob(make_user):
    return await make_user("bob")


async def connect(manager, credentials, user, sid):
    await manager.on_connect(sid, {}, {"token": credentials.issue_token(user.id)})


def test_token_is_read_from_auth_then_header():
    assert extract_token({}, {"token": "abc"}) == "abc"
    assert extract_token({"HTTP_AUTHORIZATION": "Bearer xyz"}, None) == "xyz"
    assert extract_token({"HTTP_AUTHORIZATION": "Basic xyz"}, {}) is None


async def test_connect_registers_user(manager, toolkit, credentials, transport, alice):
    await connect(manager, credentials, alice, "sid-alice")

    assert toolkit.registry.lookup(alice.id) == "sid-alice"
    assert manager.sessions["sid-alice"].id == alice.id
    assert ("user_status", {"userId": alice.id, "online": True}) in transport.broadcasts


async def test_connect_with_header_token(manager, toolkit, credentials, alice):
    environ = {"HTTP_AUTHORIZATION": f"Bearer {credentials.issue_token(alice.id)}"}

    await manager.on_connect("sid-alice", environ, None)

    assert toolkit.registry.is_online(alice.id)


@pytest.mark.parametrize(
    ("auth", "message"),
    [
        (None, "Authentication required"),
        ({"token": "not-a-jwt"}, "Invalid token"),
    ],
)
async def test_connect_refused(manager, toolkit, auth, message):
    with pytest.raises(ConnectionRefusedError) as refused:
        await manager.on_connect("sid-x", {}, auth)

    assert refused.value.error_args["message"] == message
    assert toolkit.registry.online_user_ids() == []


async def test_connect_refused_for_deleted_user(manager, credentials):
    with pytest.raises(ConnectionRefusedError) as refused:
        await manager.on_connect("sid-x", {}, {"token": credentials.issue_token(404)})

    assert refused.value.error_args["message"] == "User not found"


async def test_disconnect_unregisters_user(manager, toolkit, credentials, alice):
    await connect(manager, credentials, alice, "sid-alice")

    await manager.on_disconnect("sid-alice", "client disconnect")

    assert not toolkit.registry.is_online(alice.id)
    assert "sid-alice" not in manager.sessions


async def test_disconnect_of_replaced_connection_keeps_user_online(manager, toolkit, credentials, alice):
    await connect(manager, credentials, alice, "sid-old")
    await connect(manager, credentials, alice, "sid-new")

    await manager.on_disconnect("sid-old")

    assert toolkit.registry.lookup(alice.id) == "sid-new"


async def test_send_message_event_relays_to_receiver(manager, credentials, transport, alice, bob):
    await connect(manager, credentials, alice, "sid-alice")
    await connect(manager, credentials, bob, "sid-bob")

    await manager.on_send_message("sid-alice", {"receiverId": bob.id, "content": "hi"})

    [received] = transport.sent_to("sid-bob", "receive_message")
    assert received["senderId"] == alice.id
    assert transport.sent_to("sid-alice", "receive_message") == [received]


async def test_domain_error_is_reported_to_origin_only(manager, credentials, transport, alice, bob):
    await connect(manager, credentials, alice, "sid-alice")
    await connect(manager, credentials, bob, "sid-bob")

    await manager.on_send_message("sid-alice", {"receiverId": alice.id, "content": "hi"})

    assert transport.sent_to("sid-alice", "error") == [{"message": "You cannot send a message to yourself"}]
    assert transport.sent_to("sid-bob", "error") == []


async def test_malformed_payload_is_an_invalid_argument(manager, credentials, transport, alice):
    await connect(manager, credentials, alice, "sid-alice")

    await manager.on_send_message("sid-alice", {"content": "missing receiver"})

    [error] = transport.sent_to("sid-alice", "error")
    assert error["message"] == "Invalid payload"
    assert error["details"]


async def test_event_from_unknown_connection_is_rejected(manager, transport):
    await manager.on_delete_message("sid-ghost", {"messageId": 1})

    assert transport.sent_to("sid-ghost", "error") == [{"message": "Authentication required"}]


async def test_unexpected_error_becomes_internal_error(manager, toolkit, credentials, transport, alice, monkeypatch):
    await connect(manager, credentials, alice, "sid-alice")

    async def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(toolkit.relay, "mark_read", broken)

    await manager.on_mark_messages_read("sid-alice", {"senderId": 2})

    assert transport.sent_to("sid-alice", "error") == [{"message": "Internal server error", "details": "boom"}]


async def test_edit_and_delete_events(manager, toolkit, credentials, transport, alice, bob, databases):
    await connect(manager, credentials, alice, "sid-alice")
    await connect(manager, credentials, bob, "sid-bob")
    sent = await toolkit.relay.send(alice.id, bob.id, "hi")

    await manager.on_edit_message("sid-alice", {"messageId": sent.id, "content": "hello"})
    await manager.on_delete_message("sid-bob", {"messageId": sent.id})

    assert transport.sent_to("sid-bob", "message_updated")[0]["content"] == "hello"
    assert transport.sent_to("sid-bob", "error")[0]["message"] == "You do not have permission to delete this message"
    assert await databases.message_db.get_message_by_id(sent.id) is not None


async def test_mark_messages_read_event(manager, toolkit, credentials, transport, alice, bob):
    await connect(manager, credentials, alice, "sid-alice")
    await connect(manager, credentials, bob, "sid-bob")
    await toolkit.relay.send(alice.id, bob.id, "hi")

    await manager.on_mark_messages_read("sid-bob", {"senderId": alice.id})

    assert transport.sent_to("sid-alice", "messages_read") == [{"byUserId": bob.id}]
    assert transport.sent_to("sid-bob", "messages_marked_read") == [{"senderId": alice.id}]
