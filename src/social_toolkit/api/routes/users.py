from typing import Annotated, Any

from fastapi import APIRouter, File, Form, UploadFile

from social_toolkit.api.dependencies import CurrentUser, DefaultPage, ToolkitDep
from social_toolkit.api.routes.auth import read_upload
from social_toolkit.schemas import FollowView, UserCard, UserListItem, UserProfile
from social_toolkit.utils.pagination import Page

router = APIRouter(tags=["users"])


@router.get("/profile")
async def get_own_profile(toolkit: ToolkitDep, user: CurrentUser) -> UserProfile:
    return await toolkit.users.get_own_profile(user.id)


@router.put("/profile")
async def update_profile(
    toolkit: ToolkitDep,
    user: CurrentUser,
    username: Annotated[str | None, Form()] = None,
    bio: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    profile_pic: Annotated[UploadFile | None, File(alias="profilePic")] = None,
) -> UserProfile:
    return await toolkit.users.update_profile(user.id, username, bio, password, await read_upload(profile_pic))


@router.get("/profile/{user_id}")
async def get_profile(toolkit: ToolkitDep, user: CurrentUser, user_id: int) -> UserProfile:
    return await toolkit.users.get_profile(user_id, viewer_id=user.id)


@router.get("/users/search")
async def search_users(toolkit: ToolkitDep, user: CurrentUser, query: str | None = None) -> list[UserCard]:
    return await toolkit.users.search_users(query)


@router.get("/users")
async def list_users(toolkit: ToolkitDep, user: CurrentUser, search: str | None = None) -> list[UserListItem]:
    return await toolkit.users.list_users(user.id, search)


@router.post("/users/{user_id}/follow")
async def follow(toolkit: ToolkitDep, user: CurrentUser, user_id: int) -> dict[str, Any]:
    count = await toolkit.follows.follow(user.id, user_id)
    return {"message": "User followed", "followerCount": count}


@router.delete("/users/{user_id}/follow")
async def unfollow(toolkit: ToolkitDep, user: CurrentUser, user_id: int) -> dict[str, Any]:
    count = await toolkit.follows.unfollow(user.id, user_id)
    return {"message": "User unfollowed", "followerCount": count}


@router.get("/users/{user_id}/followers")
async def followers(toolkit: ToolkitDep, user: CurrentUser, user_id: int, page: DefaultPage) -> Page[FollowView]:
    return await toolkit.follows.followers(user_id, user.id, page)


@router.get("/users/{user_id}/following")
async def following(toolkit: ToolkitDep, user: CurrentUser, user_id: int, page: DefaultPage) -> Page[FollowView]:
    return await toolkit.follows.following(user_id, user.id, page)
