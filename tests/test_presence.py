from social_toolkit.realtime.presence import PresenceRegistry


async def test_register_records_connection_and_broadcasts_online(transport):
    registry = PresenceRegistry(transport)

    await registry.register(1, "sid-1")

    assert registry.lookup(1) == "sid-1"
    assert registry.is_online(1)
    assert transport.broadcasts == [("user_status", {"userId": 1, "online": True})]


async def test_later_connection_replaces_earlier_one(transport):
    registry = PresenceRegistry(transport)

    await registry.register(1, "sid-1")
    await registry.register(1, "sid-2")

    assert registry.lookup(1) == "sid-2"
    assert registry.online_user_ids() == [1]


async def test_double_unregister_broadcasts_offline_once(transport):
    registry = PresenceRegistry(transport)
    await registry.register(1, "sid-1")

    assert await registry.unregister(1) is True
    assert await registry.unregister(1) is False

    offline = [payload for event, payload in transport.broadcasts if payload["online"] is False]
    assert offline == [{"userId": 1, "online": False}]
    assert registry.lookup(1) is None


async def test_unregister_unknown_user_is_a_silent_noop(transport):
    registry = PresenceRegistry(transport)

    assert await registry.unregister(42) is False
    assert transport.broadcasts == []


async def test_stale_connection_disconnect_keeps_user_online(transport):
    registry = PresenceRegistry(transport)
    await registry.register(1, "old")
    await registry.register(1, "new")

    assert await registry.unregister(1, "old") is False

    assert registry.lookup(1) == "new"
    assert all(payload["online"] for _, payload in transport.broadcasts)


async def test_matching_connection_disconnect_takes_user_offline(transport):
    registry = PresenceRegistry(transport)
    await registry.register(1, "sid-1")

    assert await registry.unregister(1, "sid-1") is True
    assert not registry.is_online(1)


async def test_lookup_of_absent_user_returns_none(transport):
    assert PresenceRegistry(transport).lookup(7) is None
