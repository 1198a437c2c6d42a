"""
Client-facing projections of the stored records.

The controllers assemble these views from repository records; both the HTTP
responses and the socket payloads are their camelCase serialization. A view
never carries the password hash, and binary media leaves as base64.
"""

from datetime import datetime

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.social_database.data_models.category import Category
from social_toolkit.social_database.data_models.comment import Comment
from social_toolkit.social_database.data_models.message import Message
from social_toolkit.social_database.data_models.notification import Notification
from social_toolkit.social_database.data_models.post import Post
from social_toolkit.social_database.data_models.user import User
from social_toolkit.utils.media import MediaBytes


class UserSummary(SocialModel):
    """The minimal author card embedded in posts, comments and messages."""

    id: int
    username: str
    profile_pic: MediaBytes = None

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, username=user.username, profile_pic=user.profile_pic)


class ProfileCounts(SocialModel):
    posts: int
    followers: int
    following: int


class UserProfile(UserSummary):
    """
    A profile page.

    'email' is only filled for the caller's own profile; 'is_following' only
    for somebody else's.
    """

    bio: str | None = None
    email: str | None = None
    created_at: datetime
    counts: ProfileCounts
    is_following: bool | None = None


class UserCard(UserSummary):
    bio: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserCard":
        return cls(id=user.id, username=user.username, profile_pic=user.profile_pic, bio=user.bio)


class UserListItem(UserCard):
    created_at: datetime
    is_following: bool
    followers: int


class FollowView(SocialModel):
    """One entry of a followers / following list, seen from the caller."""

    user: UserCard
    is_following: bool
    followed_at: datetime


class LoginResult(SocialModel):
    token: str
    user_id: int
    username: str
    profile_pic: MediaBytes = None


class CommentView(SocialModel):
    id: int
    post_id: int
    content: str
    created_at: datetime
    user: UserSummary

    @classmethod
    def build(cls, comment: Comment, author: UserSummary) -> "CommentView":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            content=comment.content,
            created_at=comment.created_at,
            user=author,
        )


class LikeView(SocialModel):
    user: UserSummary
    created_at: datetime


class PostView(SocialModel):
    id: int
    description: str
    content: MediaBytes = None
    created_at: datetime
    user_id: int
    category_id: int
    user: UserSummary
    category: Category | None = None
    comment_count: int
    like_count: int
    has_liked: bool


class PostDetail(PostView):
    comments: list[CommentView]


class PostReference(SocialModel):
    id: int
    description: str

    @classmethod
    def from_post(cls, post: Post) -> "PostReference":
        return cls(id=post.id, description=post.description)


class MessageView(Message):
    """A stored message with both parties' summaries attached."""

    sender: UserSummary | None = None
    receiver: UserSummary | None = None


class NotificationView(Notification):
    from_user: UserSummary | None = None
    post: PostReference | None = None


class ConversationSummary(SocialModel):
    user: UserSummary
    last_message: str
    last_message_time: datetime
    unread_count: int
