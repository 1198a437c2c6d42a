from social_toolkit.realtime.notifications import render_message
from social_toolkit.social_database.data_models.notification import NotificationType


async def test_notify_persists_and_pushes_to_connected_target(toolkit, databases, transport, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await toolkit.registry.register(bob.id, "sid-bob")

    await toolkit.fanout.notify(NotificationType.LIKE, bob.id, alice.id, post_id=9)

    stored = await databases.notification_db.get_notifications_by_user(bob.id)
    assert len(stored) == 1
    assert stored[0].type == NotificationType.LIKE
    assert stored[0].from_user_id == alice.id
    assert stored[0].is_read is False
    assert transport.sent_to("sid-bob", "new_notification") == [
        {
            "type": "like",
            "fromUserId": alice.id,
            "fromUsername": "alice",
            "postId": 9,
            "message": "alice liked your post",
        }
    ]


async def test_notify_offline_target_only_persists(toolkit, databases, transport, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")

    await toolkit.fanout.notify(NotificationType.FOLLOW, bob.id, alice.id)

    assert await databases.notification_db.count_notifications(bob.id) == 1
    assert transport.emitted == []


async def test_unknown_origin_falls_back_to_default_name(toolkit, transport, make_user):
    bob = await make_user("bob")
    await toolkit.registry.register(bob.id, "sid-bob")

    await toolkit.fanout.notify(NotificationType.COMMENT, bob.id, 999)

    [payload] = transport.sent_to("sid-bob", "new_notification")
    assert payload["fromUsername"] == "User"
    assert payload["message"] == "User commented on your post"


async def test_supplied_username_is_used_without_lookup(toolkit, transport, make_user):
    bob = await make_user("bob")
    await toolkit.registry.register(bob.id, "sid-bob")

    await toolkit.fanout.notify(NotificationType.MESSAGE, bob.id, 123, from_username="carol")

    [payload] = transport.sent_to("sid-bob", "new_notification")
    assert payload["message"] == "carol sent you a message"


async def test_notify_many_stores_every_row_and_pushes_only_to_connected(toolkit, databases, transport, make_user):
    author = await make_user("author")
    await toolkit.registry.register(5, "sid-5")

    await toolkit.fanout.notify_many(NotificationType.NEW_POST, [5, 6], author.id, post_id=3)

    assert await databases.notification_db.count_notifications(5) == 1
    assert await databases.notification_db.count_notifications(6) == 1
    pushes = transport.events("new_notification")
    assert len(pushes) == 1
    assert pushes[0][1] == "sid-5"
    assert pushes[0][0]["message"] == "author made a new post"


async def test_notify_many_with_no_targets_is_a_noop(toolkit, databases, transport):
    await toolkit.fanout.notify_many(NotificationType.NEW_POST, [], 1, post_id=3)

    assert transport.emitted == []


async def test_persistence_failure_is_swallowed(toolkit, databases, transport, monkeypatch):
    async def broken(notification):
        raise RuntimeError("database is down")

    monkeypatch.setattr(databases.notification_db, "create_notification", broken)

    await toolkit.fanout.notify(NotificationType.LIKE, 1, 2)

    assert transport.emitted == []


async def test_transport_failure_does_not_raise(toolkit, databases, transport, make_user):
    bob = await make_user("bob")
    await toolkit.registry.register(bob.id, "sid-bob")
    transport.failing_connections.add("sid-bob")

    await toolkit.fanout.notify(NotificationType.LIKE, bob.id, 1)

    assert await databases.notification_db.count_notifications(bob.id) == 1


async def test_scheduled_work_completes_on_drain(toolkit, databases, make_user):
    bob = await make_user("bob")

    toolkit.fanout.schedule(NotificationType.FOLLOW, bob.id, 1)
    toolkit.fanout.schedule_many(NotificationType.NEW_POST, [bob.id], 1, post_id=4)
    await toolkit.fanout.drain()

    assert await databases.notification_db.count_notifications(bob.id) == 2


def test_templates_cover_every_type_with_a_fallback():
    assert render_message(NotificationType.FOLLOW, "ann") == "ann started following you"
    assert render_message("poke", "ann") == "New notification from ann"
