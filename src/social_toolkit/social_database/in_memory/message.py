from itertools import count

from social_toolkit.social_database.data_models.message import Message, MessageDatabase
from social_toolkit.social_database.in_memory.base import slice_page


class InMemoryMessageDatabase(MessageDatabase):
    def __init__(self) -> None:
        self.messages: dict[int, Message] = {}
        self._ids = count(1)

    async def create_message(self, message: Message) -> Message:
        stored = message.model_copy(update={"id": next(self._ids)})
        self.messages[stored.id] = stored
        return stored.model_copy()

    async def get_message_by_id(self, message_id: int) -> Message | None:
        message = self.messages.get(message_id)
        return message.model_copy() if message else None

    async def update_message(self, message: Message) -> Message:
        if message.id not in self.messages:
            raise KeyError(f"Message {message.id} does not exist")
        stored = self.messages[message.id]
        self.messages[message.id] = message.model_copy(update={"is_read": stored.is_read or message.is_read})
        return self.messages[message.id].model_copy()

    async def delete_message(self, message_id: int) -> bool:
        return self.messages.pop(message_id, None) is not None

    def _between(self, user_id: int, other_user_id: int) -> list[Message]:
        pair = {user_id, other_user_id}
        messages = [m for m in self.messages.values() if {m.sender_id, m.receiver_id} == pair]
        return sorted(messages, key=lambda m: (m.created_at, m.id), reverse=True)

    async def get_messages_between(
        self, user_id: int, other_user_id: int, offset: int = 0, limit: int | None = None
    ) -> list[Message]:
        return [m.model_copy() for m in slice_page(self._between(user_id, other_user_id), offset, limit)]

    async def count_messages_between(self, user_id: int, other_user_id: int) -> int:
        return len(self._between(user_id, other_user_id))

    async def get_messages_by_user(self, user_id: int) -> list[Message]:
        messages = [m for m in self.messages.values() if user_id in (m.sender_id, m.receiver_id)]
        return [m.model_copy() for m in sorted(messages, key=lambda m: (m.created_at, m.id), reverse=True)]

    async def mark_read(self, sender_id: int, receiver_id: int) -> int:
        changed = 0
        for message in self.messages.values():
            if message.sender_id == sender_id and message.receiver_id == receiver_id and not message.is_read:
                message.is_read = True
                changed += 1
        return changed

    async def count_unread(self, receiver_id: int) -> int:
        return sum(1 for m in self.messages.values() if m.receiver_id == receiver_id and not m.is_read)
