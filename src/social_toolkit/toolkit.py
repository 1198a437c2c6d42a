"""
Social toolkit composition root (Facade).

'SocialToolkit' wires every component once, with explicit dependencies and no
module-level singletons:

    repositories  -> 'SocialDatabases' (in-memory or SQL)
    credentials   -> 'CredentialProvider'
    realtime      -> 'PresenceRegistry', 'NotificationFanout', 'MessageRelay'
                     over a single 'Transport'
    controllers   -> one per resource, used by the HTTP routers

The Socket.IO glue ('SocketManager') is built on demand by 'socket_manager()'
so the toolkit itself stays independent of any server object.
"""

from social_toolkit.auth.base import CredentialProvider
from social_toolkit.controllers import (
    CategoryController,
    CommentController,
    FollowController,
    LikeController,
    MessageController,
    NotificationController,
    PostController,
    UserController,
)
from social_toolkit.realtime.notifications import NotificationFanout
from social_toolkit.realtime.presence import PresenceRegistry
from social_toolkit.realtime.relay import MessageRelay
from social_toolkit.realtime.socket_manager import SocketManager
from social_toolkit.realtime.transport import Transport
from social_toolkit.social_database import SocialDatabases


class SocialToolkit:
    def __init__(self, databases: SocialDatabases, credentials: CredentialProvider, transport: Transport) -> None:
        self.databases = databases
        self.credentials = credentials
        self.transport = transport

        self.registry = PresenceRegistry(transport)
        self.fanout = NotificationFanout(databases.notification_db, databases.user_db, self.registry, transport)
        self.relay = MessageRelay(databases.message_db, databases.user_db, self.registry, transport, self.fanout)

        self.users = UserController(databases, credentials)
        self.categories = CategoryController(databases)
        self.posts = PostController(databases, self.fanout)
        self.follows = FollowController(databases, self.fanout)
        self.likes = LikeController(databases, self.fanout)
        self.comments = CommentController(databases, self.fanout)
        self.notifications = NotificationController(databases)
        self.messages = MessageController(databases, self.relay)

    def socket_manager(self) -> SocketManager:
        return SocketManager(self.credentials, self.databases.user_db, self.registry, self.relay, self.transport)

    async def shutdown(self) -> None:
        await self.fanout.drain()
