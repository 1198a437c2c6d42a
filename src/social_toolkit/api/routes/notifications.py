from typing import Any

from fastapi import APIRouter

from social_toolkit.api.dependencies import CurrentUser, DefaultPage, ToolkitDep
from social_toolkit.schemas import NotificationView
from social_toolkit.social_database.data_models.notification import Notification
from social_toolkit.utils.pagination import Page

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(toolkit: ToolkitDep, user: CurrentUser, page: DefaultPage) -> Page[NotificationView]:
    return await toolkit.notifications.notifications(user.id, page)


@router.get("/unread-count")
async def unread_count(toolkit: ToolkitDep, user: CurrentUser) -> dict[str, Any]:
    return {"unreadCount": await toolkit.notifications.unread_count(user.id)}


@router.put("/read-all")
async def mark_all_read(toolkit: ToolkitDep, user: CurrentUser) -> dict[str, Any]:
    count = await toolkit.notifications.mark_all_read(user.id)
    return {"message": "All notifications marked as read", "count": count}


@router.put("/{notification_id}/read")
async def mark_read(toolkit: ToolkitDep, user: CurrentUser, notification_id: int) -> Notification:
    return await toolkit.notifications.mark_read(notification_id, user.id)


@router.delete("/{notification_id}")
async def delete_notification(toolkit: ToolkitDep, user: CurrentUser, notification_id: int) -> dict[str, Any]:
    await toolkit.notifications.delete_notification(notification_id, user.id)
    return {"message": "Notification deleted"}


@router.delete("")
async def delete_all_notifications(toolkit: ToolkitDep, user: CurrentUser) -> dict[str, Any]:
    count = await toolkit.notifications.delete_all(user.id)
    return {"message": "All notifications deleted", "count": count}
