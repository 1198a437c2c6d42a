"""
Direct messages over HTTP.

Mutations go through 'MessageRelay' so that connected parties get the same
pushes as when the request arrives over the socket; the reads (conversation
list, history, unread count) are assembled here.
"""

from social_toolkit.controllers.base import require_user
from social_toolkit.realtime.relay import MessageRelay
from social_toolkit.schemas import ConversationSummary, MessageView, UserSummary
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.message import Message
from social_toolkit.utils.pagination import Page, PageParams


class MessageController:
    def __init__(self, databases: SocialDatabases, relay: MessageRelay) -> None:
        self.message_db = databases.message_db
        self.user_db = databases.user_db
        self.relay = relay

    async def send_message(self, sender_id: int, receiver_id: int, content: str) -> MessageView:
        return await self.relay.send(sender_id, receiver_id, content)

    async def edit_message(self, message_id: int, user_id: int, content: str) -> MessageView:
        return await self.relay.edit(message_id, user_id, content)

    async def delete_message(self, message_id: int, user_id: int) -> None:
        await self.relay.delete(message_id, user_id)

    async def mark_conversation_read(self, user_id: int, other_user_id: int) -> int:
        return await self.relay.mark_read(user_id, other_user_id)

    async def unread_count(self, user_id: int) -> int:
        return await self.message_db.count_unread(user_id)

    async def conversations(self, user_id: int) -> list[ConversationSummary]:
        """One entry per conversation partner, most recent conversation first."""
        latest: dict[int, Message] = {}
        unread: dict[int, int] = {}
        for message in await self.message_db.get_messages_by_user(user_id):
            partner_id = message.receiver_id if message.sender_id == user_id else message.sender_id
            latest.setdefault(partner_id, message)
            if message.receiver_id == user_id and not message.is_read:
                unread[partner_id] = unread.get(partner_id, 0) + 1

        partners = {user.id: user for user in await self.user_db.get_users_by_ids(list(latest))}
        summaries = [
            ConversationSummary(
                user=UserSummary.from_user(partners[partner_id]),
                last_message=message.content,
                last_message_time=message.created_at,
                unread_count=unread.get(partner_id, 0),
            )
            for partner_id, message in latest.items()
            if partner_id in partners
        ]
        return sorted(summaries, key=lambda summary: summary.last_message_time, reverse=True)

    async def history(self, user_id: int, other_user_id: int, params: PageParams) -> Page[MessageView]:
        """Messages exchanged with 'other_user_id', newest first. Received messages are marked read."""
        other = await require_user(self.user_db, other_user_id)
        me = await require_user(self.user_db, user_id)
        await self.relay.mark_read(user_id, other_user_id)
        messages = await self.message_db.get_messages_between(
            user_id, other_user_id, offset=params.offset, limit=params.limit
        )
        total = await self.message_db.count_messages_between(user_id, other_user_id)

        summaries = {me.id: UserSummary.from_user(me), other.id: UserSummary.from_user(other)}
        views = [
            MessageView(
                **message.model_dump(),
                sender=summaries.get(message.sender_id),
                receiver=summaries.get(message.receiver_id),
            )
            for message in messages
        ]
        return Page[MessageView].build(views, total, params)
