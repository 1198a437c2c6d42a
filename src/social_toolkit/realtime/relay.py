"""
Message relay.

'MessageRelay' owns every mutation of direct messages, whichever surface the
request came in on (a socket event or an HTTP call). Each operation validates,
persists, and only then pushes to the parties involved:

    send      -> 'receive_message' to the sender (echo) and the receiver,
                 plus a 'message' notification for the receiver.
    edit      -> 'message_updated' to both parties.
    mark_read -> 'messages_read' to the counterpart, 'messages_marked_read'
                 back to the reader.
    delete    -> 'message_deleted' to both parties.

'origin' is the connection the request came from; it receives the echo.
Without it the sender's registered connection is used. Pushes to absent
parties are skipped.
"""

from loguru import logger

from social_toolkit.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from social_toolkit.realtime.notifications import NotificationFanout
from social_toolkit.realtime.presence import PresenceRegistry
from social_toolkit.realtime.transport import Transport
from social_toolkit.schemas import MessageView, UserSummary
from social_toolkit.social_database.data_models.message import Message, MessageDatabase
from social_toolkit.social_database.data_models.notification import NotificationType
from social_toolkit.social_database.data_models.user import User, UserDatabase


class MessageRelay:
    def __init__(
        self,
        message_db: MessageDatabase,
        user_db: UserDatabase,
        registry: PresenceRegistry,
        transport: Transport,
        fanout: NotificationFanout,
    ) -> None:
        self.message_db = message_db
        self.user_db = user_db
        self.registry = registry
        self.transport = transport
        self.fanout = fanout

    async def send(self, sender_id: int, receiver_id: int, content: str, origin: str | None = None) -> MessageView:
        if not content or not content.strip():
            raise InvalidArgumentError("Message content is required")
        if receiver_id == sender_id:
            raise InvalidArgumentError("You cannot send a message to yourself")
        receiver = await self.user_db.get_user_by_id(receiver_id)
        if receiver is None:
            raise NotFoundError("Receiver not found")

        message = await self.message_db.create_message(
            Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
        )
        sender = await self.user_db.get_user_by_id(sender_id)
        view = self._view(message, sender, receiver)
        logger.debug(f"Message {message.id} stored from user {sender_id} to user {receiver_id}")

        self.fanout.schedule(
            NotificationType.MESSAGE,
            receiver_id,
            sender_id,
            from_username=sender.username if sender else None,
        )
        await self._push_to_pair("receive_message", view.to_payload(), sender_id, receiver_id, origin)
        return view

    async def edit(self, message_id: int, editor_id: int, content: str, origin: str | None = None) -> MessageView:
        if not content or not content.strip():
            raise InvalidArgumentError("Message content is required")
        message = await self._get_owned(message_id, editor_id, "edit")

        updated = await self.message_db.update_message(message.model_copy(update={"content": content}))
        view = await self.describe(updated)
        await self._push_to_pair("message_updated", view.to_payload(), updated.sender_id, updated.receiver_id, origin)
        return view

    async def mark_read(self, reader_id: int, counterpart_id: int, origin: str | None = None) -> int:
        count = await self.message_db.mark_read(sender_id=counterpart_id, receiver_id=reader_id)
        await self.transport.push("messages_read", {"byUserId": reader_id}, self.registry.lookup(counterpart_id))
        await self.transport.push(
            "messages_marked_read", {"senderId": counterpart_id}, origin or self.registry.lookup(reader_id)
        )
        return count

    async def delete(self, message_id: int, requester_id: int, origin: str | None = None) -> None:
        message = await self._get_owned(message_id, requester_id, "delete")
        await self.message_db.delete_message(message.id)
        await self._push_to_pair(
            "message_deleted", {"messageId": message.id}, message.sender_id, message.receiver_id, origin
        )

    async def describe(self, message: Message) -> MessageView:
        """Attach sender and receiver summaries to a stored message."""
        users = {user.id: user for user in await self.user_db.get_users_by_ids([message.sender_id, message.receiver_id])}
        return self._view(message, users.get(message.sender_id), users.get(message.receiver_id))

    @staticmethod
    def _view(message: Message, sender: User | None, receiver: User | None) -> MessageView:
        return MessageView(
            **message.model_dump(),
            sender=UserSummary.from_user(sender) if sender else None,
            receiver=UserSummary.from_user(receiver) if receiver else None,
        )

    async def _get_owned(self, message_id: int, user_id: int, action: str) -> Message:
        message = await self.message_db.get_message_by_id(message_id)
        if message is None:
            raise NotFoundError("Message not found")
        if message.sender_id != user_id:
            raise ForbiddenError(f"You do not have permission to {action} this message")
        return message

    async def _push_to_pair(
        self, event: str, payload: dict, sender_id: int, receiver_id: int, origin: str | None
    ) -> None:
        await self.transport.push(event, payload, origin or self.registry.lookup(sender_id))
        await self.transport.push(event, payload, self.registry.lookup(receiver_id))
