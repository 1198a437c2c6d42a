"""
Direct message data model and storage interface.

A 'Message' goes from 'sender_id' to 'receiver_id'. 'is_read' only ever
flips from False to True ('mark_read'); it is never reset. Only the sender
may edit or delete a message (enforced by 'MessageRelay').

Concrete implementations: 'InMemoryMessageDatabase', 'SQLMessageDatabase'.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import Field

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.utils.time import utc_now


class Message(SocialModel):
    """A direct message between two users."""

    id: int = 0
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class MessageDatabase(ABC):
    """Abstract repository for 'Message' records."""

    @abstractmethod
    async def create_message(self, message: Message) -> Message:
        pass

    @abstractmethod
    async def get_message_by_id(self, message_id: int) -> Message | None:
        pass

    @abstractmethod
    async def update_message(self, message: Message) -> Message:
        pass

    @abstractmethod
    async def delete_message(self, message_id: int) -> bool:
        pass

    @abstractmethod
    async def get_messages_between(
        self, user_id: int, other_user_id: int, offset: int = 0, limit: int | None = None
    ) -> list[Message]:
        """Messages exchanged in either direction between the two users, newest first."""
        pass

    @abstractmethod
    async def count_messages_between(self, user_id: int, other_user_id: int) -> int:
        pass

    @abstractmethod
    async def get_messages_by_user(self, user_id: int) -> list[Message]:
        """Every message sent or received by 'user_id', newest first."""
        pass

    @abstractmethod
    async def mark_read(self, sender_id: int, receiver_id: int) -> int:
        """Flag every unread message from 'sender_id' to 'receiver_id' as read; return how many changed."""
        pass

    @abstractmethod
    async def count_unread(self, receiver_id: int) -> int:
        pass
