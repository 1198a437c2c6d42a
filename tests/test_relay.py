import pytest

from social_toolkit.errors import ForbiddenError, InvalidArgumentError, NotFoundError


@pytest.fixture
async def pair(make_user):
    return await make_user("alice"), await make_user("bob")


async def test_send_to_connected_receiver_pushes_once_and_echoes(toolkit, transport, pair):
    alice, bob = pair
    await toolkit.registry.register(alice.id, "sid-alice")
    await toolkit.registry.register(bob.id, "sid-bob")

    view = await toolkit.relay.send(alice.id, bob.id, "hi")
    await toolkit.fanout.drain()

    received = transport.sent_to("sid-bob", "receive_message")
    assert len(received) == 1
    assert received[0]["content"] == "hi"
    assert received[0]["sender"]["username"] == "alice"
    assert received[0]["receiver"]["username"] == "bob"
    assert transport.sent_to("sid-alice", "receive_message") == received
    assert view.id == received[0]["id"]


async def test_send_persists_unread_message_and_notifies(toolkit, databases, transport, pair):
    alice, bob = pair
    await toolkit.registry.register(bob.id, "sid-bob")

    await toolkit.relay.send(alice.id, bob.id, "hi")
    await toolkit.fanout.drain()

    [message] = await databases.message_db.get_messages_between(alice.id, bob.id)
    assert message.to_payload() | {"id": 0, "createdAt": None} == {
        "id": 0,
        "senderId": alice.id,
        "receiverId": bob.id,
        "content": "hi",
        "isRead": False,
        "createdAt": None,
    }
    [notification] = transport.sent_to("sid-bob", "new_notification")
    assert notification["type"] == "message"
    assert notification["fromUsername"] == "alice"


async def test_send_to_offline_receiver_only_persists(toolkit, databases, transport, pair):
    alice, bob = pair

    await toolkit.relay.send(alice.id, bob.id, "are you there?")
    await toolkit.fanout.drain()

    assert transport.emitted == []
    assert await databases.message_db.count_messages_between(alice.id, bob.id) == 1
    assert await databases.notification_db.count_notifications(bob.id) == 1


async def test_echo_goes_to_origin_connection(toolkit, transport, pair):
    alice, bob = pair
    await toolkit.registry.register(alice.id, "sid-alice")

    await toolkit.relay.send(alice.id, bob.id, "hi", origin="sid-alice-tab")

    assert len(transport.sent_to("sid-alice-tab", "receive_message")) == 1
    assert transport.sent_to("sid-alice", "receive_message") == []


async def test_send_to_self_is_rejected_without_persisting(toolkit, databases, pair):
    alice, _ = pair

    with pytest.raises(InvalidArgumentError):
        await toolkit.relay.send(alice.id, alice.id, "hi")

    assert await databases.message_db.get_messages_by_user(alice.id) == []


@pytest.mark.parametrize("content", ["", "   "])
async def test_blank_content_is_rejected(toolkit, pair, content):
    alice, bob = pair

    with pytest.raises(InvalidArgumentError):
        await toolkit.relay.send(alice.id, bob.id, content)


async def test_unknown_receiver_is_not_found(toolkit, pair):
    alice, _ = pair

    with pytest.raises(NotFoundError):
        await toolkit.relay.send(alice.id, 999, "hi")


async def test_edit_by_sender_updates_and_pushes_to_both(toolkit, databases, transport, pair):
    alice, bob = pair
    sent = await toolkit.relay.send(alice.id, bob.id, "hi")
    await toolkit.registry.register(alice.id, "sid-alice")
    await toolkit.registry.register(bob.id, "sid-bob")

    edited = await toolkit.relay.edit(sent.id, alice.id, "hello")

    assert edited.content == "hello"
    assert (await databases.message_db.get_message_by_id(sent.id)).content == "hello"
    assert transport.sent_to("sid-bob", "message_updated")[0]["content"] == "hello"
    assert transport.sent_to("sid-alice", "message_updated")[0]["content"] == "hello"


async def test_edit_by_non_sender_is_forbidden_and_changes_nothing(toolkit, databases, transport, pair):
    alice, bob = pair
    sent = await toolkit.relay.send(alice.id, bob.id, "hi")

    with pytest.raises(ForbiddenError):
        await toolkit.relay.edit(sent.id, bob.id, "tampered")

    assert (await databases.message_db.get_message_by_id(sent.id)).content == "hi"
    assert transport.events("message_updated") == []


async def test_edit_unknown_message_is_not_found(toolkit, pair):
    alice, _ = pair

    with pytest.raises(NotFoundError):
        await toolkit.relay.edit(404, alice.id, "hello")


async def test_delete_by_non_sender_is_forbidden(toolkit, databases, pair):
    alice, bob = pair
    sent = await toolkit.relay.send(alice.id, bob.id, "hi")

    with pytest.raises(ForbiddenError):
        await toolkit.relay.delete(sent.id, bob.id)

    assert await databases.message_db.get_message_by_id(sent.id) is not None


async def test_delete_by_sender_removes_and_pushes(toolkit, databases, transport, pair):
    alice, bob = pair
    sent = await toolkit.relay.send(alice.id, bob.id, "hi")
    await toolkit.registry.register(bob.id, "sid-bob")

    await toolkit.relay.delete(sent.id, alice.id)

    assert await databases.message_db.get_message_by_id(sent.id) is None
    assert transport.sent_to("sid-bob", "message_deleted") == [{"messageId": sent.id}]


async def test_mark_read_flips_unread_and_notifies_both_sides(toolkit, databases, transport, pair):
    alice, bob = pair
    await toolkit.relay.send(alice.id, bob.id, "one")
    await toolkit.relay.send(alice.id, bob.id, "two")
    await toolkit.registry.register(alice.id, "sid-alice")
    await toolkit.registry.register(bob.id, "sid-bob")

    count = await toolkit.relay.mark_read(bob.id, alice.id)

    assert count == 2
    assert await databases.message_db.count_unread(bob.id) == 0
    assert transport.sent_to("sid-alice", "messages_read") == [{"byUserId": bob.id}]
    assert transport.sent_to("sid-bob", "messages_marked_read") == [{"senderId": alice.id}]


async def test_mark_read_is_monotonic(toolkit, databases, pair):
    alice, bob = pair
    await toolkit.relay.send(alice.id, bob.id, "one")

    assert await toolkit.relay.mark_read(bob.id, alice.id) == 1
    assert await toolkit.relay.mark_read(bob.id, alice.id) == 0

    sent = await toolkit.relay.send(alice.id, bob.id, "two")
    await toolkit.relay.edit(sent.id, alice.id, "two, edited")
    messages = await databases.message_db.get_messages_between(alice.id, bob.id)
    assert [message.is_read for message in messages] == [False, True]


async def test_mark_read_only_touches_messages_to_the_reader(toolkit, databases, pair):
    alice, bob = pair
    await toolkit.relay.send(bob.id, alice.id, "from bob")

    assert await toolkit.relay.mark_read(bob.id, alice.id) == 0
    assert await databases.message_db.count_unread(alice.id) == 1
