from social_toolkit.realtime.notifications import NotificationFanout
from social_toolkit.realtime.presence import PresenceRegistry
from social_toolkit.realtime.relay import MessageRelay
from social_toolkit.realtime.socket_manager import SocketManager
from social_toolkit.realtime.transport import SocketIOTransport, Transport

__all__ = [
    "MessageRelay",
    "NotificationFanout",
    "PresenceRegistry",
    "SocketIOTransport",
    "SocketManager",
    "Transport",
]
