"""
Socket.IO connection lifecycle.

'SocketManager' binds the handshake, the disconnect hook and the four
client events to a python-socketio 'AsyncServer':

    connect            - authenticate the bearer token, remember 'sid -> user'
                         and register the user with the presence registry.
    disconnect         - forget the sid and unregister that exact connection.
    send_message       - {receiverId, content}      -> MessageRelay.send
    edit_message       - {messageId, content}       -> MessageRelay.edit
    delete_message     - {messageId}                -> MessageRelay.delete
    mark_messages_read - {senderId}                 -> MessageRelay.mark_read

Handlers never let an exception escape into python-socketio: every failure is
reported back to the originating connection only, as 'error{message, details?}'.
"""

from collections.abc import Awaitable, Callable
from typing import Any

import socketio
from loguru import logger
from pydantic import ValidationError
from socketio.exceptions import ConnectionRefusedError

from social_toolkit.auth.base import CredentialProvider
from social_toolkit.errors import InvalidArgumentError, SocialError, UnauthorizedError
from social_toolkit.realtime.presence import PresenceRegistry
from social_toolkit.realtime.relay import MessageRelay
from social_toolkit.realtime.transport import Transport
from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.social_database.data_models.user import User, UserDatabase


class SendMessageEvent(SocialModel):
    receiver_id: int
    content: str


class EditMessageEvent(SocialModel):
    message_id: int
    content: str


class DeleteMessageEvent(SocialModel):
    message_id: int


class MarkMessagesReadEvent(SocialModel):
    sender_id: int


def extract_token(environ: dict[str, Any], auth: Any) -> str | None:
    if isinstance(auth, dict) and auth.get("token"):
        return str(auth["token"])
    header = environ.get("HTTP_AUTHORIZATION", "")
    if header.startswith("Bearer "):
        return header.removeprefix("Bearer ").strip() or None
    return None


class SocketManager:
    def __init__(
        self,
        credentials: CredentialProvider,
        user_db: UserDatabase,
        registry: PresenceRegistry,
        relay: MessageRelay,
        transport: Transport,
    ) -> None:
        self.credentials = credentials
        self.user_db = user_db
        self.registry = registry
        self.relay = relay
        self.transport = transport
        self.sessions: dict[str, User] = {}

    def bind(self, server: socketio.AsyncServer) -> None:
        server.on("connect", self.on_connect)
        server.on("disconnect", self.on_disconnect)
        server.on("send_message", self.on_send_message)
        server.on("edit_message", self.on_edit_message)
        server.on("delete_message", self.on_delete_message)
        server.on("mark_messages_read", self.on_mark_messages_read)

    async def authenticate(self, token: str | None) -> User:
        if not token:
            raise ConnectionRefusedError("Authentication required")
        try:
            user_id = self.credentials.resolve_token(token)
        except UnauthorizedError as e:
            raise ConnectionRefusedError("Invalid token") from e
        user = await self.user_db.get_user_by_id(user_id)
        if user is None:
            raise ConnectionRefusedError("User not found")
        return user

    async def on_connect(self, sid: str, environ: dict[str, Any], auth: Any = None) -> None:
        try:
            user = await self.authenticate(extract_token(environ, auth))
        except ConnectionRefusedError as e:
            logger.info(f"Refused socket connection {sid}: {e.error_args['message']}")
            raise
        self.sessions[sid] = user
        await self.registry.register(user.id, sid)

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        user = self.sessions.pop(sid, None)
        if user is None:
            return
        await self.registry.unregister(user.id, sid)

    async def on_send_message(self, sid: str, data: Any = None) -> None:
        async def handle(user: User) -> None:
            event = SendMessageEvent.model_validate(data)
            await self.relay.send(user.id, event.receiver_id, event.content, origin=sid)

        await self._dispatch(sid, "send_message", handle)

    async def on_edit_message(self, sid: str, data: Any = None) -> None:
        async def handle(user: User) -> None:
            event = EditMessageEvent.model_validate(data)
            await self.relay.edit(event.message_id, user.id, event.content, origin=sid)

        await self._dispatch(sid, "edit_message", handle)

    async def on_delete_message(self, sid: str, data: Any = None) -> None:
        async def handle(user: User) -> None:
            event = DeleteMessageEvent.model_validate(data)
            await self.relay.delete(event.message_id, user.id, origin=sid)

        await self._dispatch(sid, "delete_message", handle)

    async def on_mark_messages_read(self, sid: str, data: Any = None) -> None:
        async def handle(user: User) -> None:
            event = MarkMessagesReadEvent.model_validate(data)
            await self.relay.mark_read(user.id, event.sender_id, origin=sid)

        await self._dispatch(sid, "mark_messages_read", handle)

    async def _dispatch(self, sid: str, event: str, handler: Callable[[User], Awaitable[None]]) -> None:
        try:
            user = self.sessions.get(sid)
            if user is None:
                raise UnauthorizedError("Authentication required")
            try:
                await handler(user)
            except ValidationError as e:
                raise InvalidArgumentError("Invalid payload", e.errors(include_url=False, include_context=False)) from e
        except SocialError as e:
            await self.transport.push("error", e.to_event(), sid)
        except Exception as e:
            logger.exception(f"Unhandled error in socket event '{event}' from {sid}")
            await self.transport.push("error", {"message": "Internal server error", "details": str(e)}, sid)
