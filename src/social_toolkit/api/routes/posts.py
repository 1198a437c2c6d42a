from typing import Annotated, Any

from fastapi import APIRouter, File, Form, UploadFile, status

from social_toolkit.api.dependencies import CurrentUser, DefaultPage, PostPage, ToolkitDep
from social_toolkit.api.routes.auth import read_upload
from social_toolkit.api.schemas import CommentCreate
from social_toolkit.schemas import CommentView, LikeView, PostDetail, PostView
from social_toolkit.utils.pagination import Page

router = APIRouter(tags=["posts"])


@router.post("/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    toolkit: ToolkitDep,
    user: CurrentUser,
    description: Annotated[str | None, Form()] = None,
    category_id: Annotated[int | None, Form(alias="categoryId")] = None,
    content: Annotated[UploadFile | None, File()] = None,
) -> PostView:
    return await toolkit.posts.create_post(user.id, description, category_id, await read_upload(content))


@router.get("/posts/recent")
async def recent_posts(toolkit: ToolkitDep, user: CurrentUser, page: PostPage) -> Page[PostView]:
    return await toolkit.posts.recent_posts(user.id, page)


@router.get("/posts/feed")
async def feed(toolkit: ToolkitDep, user: CurrentUser, page: PostPage) -> Page[PostView]:
    return await toolkit.posts.feed(user.id, page)


@router.get("/posts/search")
async def search_posts(
    toolkit: ToolkitDep, user: CurrentUser, page: PostPage, query: str | None = None
) -> Page[PostView]:
    return await toolkit.posts.search_posts(query, user.id, page)


@router.get("/posts/category/{category_id}")
async def posts_by_category(toolkit: ToolkitDep, user: CurrentUser, category_id: int, page: PostPage) -> Page[PostView]:
    return await toolkit.posts.posts_by_category(category_id, user.id, page)


@router.get("/posts/user/{user_id}")
async def posts_by_user(toolkit: ToolkitDep, user: CurrentUser, user_id: int, page: PostPage) -> Page[PostView]:
    return await toolkit.posts.posts_by_user(user_id, user.id, page)


@router.get("/posts/{post_id}")
async def get_post(toolkit: ToolkitDep, user: CurrentUser, post_id: int) -> PostDetail:
    return await toolkit.posts.get_post(post_id, user.id)


@router.put("/posts/{post_id}")
async def update_post(
    toolkit: ToolkitDep,
    user: CurrentUser,
    post_id: int,
    description: Annotated[str | None, Form()] = None,
    category_id: Annotated[int | None, Form(alias="categoryId")] = None,
    content: Annotated[UploadFile | None, File()] = None,
) -> PostView:
    return await toolkit.posts.update_post(post_id, user.id, description, category_id, await read_upload(content))


@router.delete("/posts/{post_id}")
async def delete_post(toolkit: ToolkitDep, user: CurrentUser, post_id: int) -> dict[str, Any]:
    await toolkit.posts.delete_post(post_id, user.id)
    return {"message": "Post deleted"}


@router.post("/posts/{post_id}/like")
async def like_post(toolkit: ToolkitDep, user: CurrentUser, post_id: int) -> dict[str, Any]:
    count = await toolkit.likes.like(user.id, post_id)
    return {"message": "Post liked", "likeCount": count}


@router.delete("/posts/{post_id}/like")
async def unlike_post(toolkit: ToolkitDep, user: CurrentUser, post_id: int) -> dict[str, Any]:
    count = await toolkit.likes.unlike(user.id, post_id)
    return {"message": "Like removed", "likeCount": count}


@router.get("/posts/{post_id}/likes")
async def post_likes(toolkit: ToolkitDep, post_id: int, page: DefaultPage) -> Page[LikeView]:
    return await toolkit.likes.likes(post_id, page)


@router.post("/posts/{post_id}/comments", status_code=status.HTTP_201_CREATED)
async def create_comment(toolkit: ToolkitDep, user: CurrentUser, post_id: int, body: CommentCreate) -> CommentView:
    return await toolkit.comments.create_comment(post_id, user.id, body.content)


@router.get("/posts/{post_id}/comments")
async def post_comments(toolkit: ToolkitDep, post_id: int, page: DefaultPage) -> Page[CommentView]:
    return await toolkit.comments.comments(post_id, page)


@router.delete("/comments/{comment_id}")
async def delete_comment(toolkit: ToolkitDep, user: CurrentUser, comment_id: int) -> dict[str, Any]:
    await toolkit.comments.delete_comment(comment_id, user.id)
    return {"message": "Comment deleted"}
