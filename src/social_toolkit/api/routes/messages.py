from typing import Any

from fastapi import APIRouter, status

from social_toolkit.api.dependencies import CurrentUser, DefaultPage, ToolkitDep
from social_toolkit.api.schemas import MessageCreate, MessageUpdate
from social_toolkit.schemas import ConversationSummary, MessageView
from social_toolkit.utils.pagination import Page

router = APIRouter(tags=["messages"])


@router.post("/messages", status_code=status.HTTP_201_CREATED)
async def send_message(toolkit: ToolkitDep, user: CurrentUser, body: MessageCreate) -> MessageView:
    return await toolkit.messages.send_message(user.id, body.receiver_id, body.content or "")


@router.get("/messages/unread-count")
async def unread_count(toolkit: ToolkitDep, user: CurrentUser) -> dict[str, Any]:
    return {"unreadCount": await toolkit.messages.unread_count(user.id)}


@router.put("/messages/{message_id}")
async def edit_message(toolkit: ToolkitDep, user: CurrentUser, message_id: int, body: MessageUpdate) -> MessageView:
    return await toolkit.messages.edit_message(message_id, user.id, body.content or "")


@router.delete("/messages/{message_id}")
async def delete_message(toolkit: ToolkitDep, user: CurrentUser, message_id: int) -> dict[str, Any]:
    await toolkit.messages.delete_message(message_id, user.id)
    return {"message": "Message deleted"}


@router.get("/conversations")
async def conversations(toolkit: ToolkitDep, user: CurrentUser) -> list[ConversationSummary]:
    return await toolkit.messages.conversations(user.id)


@router.get("/conversations/{user_id}/messages")
async def conversation_messages(
    toolkit: ToolkitDep, user: CurrentUser, user_id: int, page: DefaultPage
) -> Page[MessageView]:
    return await toolkit.messages.history(user.id, user_id, page)


@router.put("/conversations/{user_id}/read")
async def mark_conversation_read(toolkit: ToolkitDep, user: CurrentUser, user_id: int) -> dict[str, Any]:
    count = await toolkit.messages.mark_conversation_read(user.id, user_id)
    return {"message": "Messages marked as read", "count": count}
