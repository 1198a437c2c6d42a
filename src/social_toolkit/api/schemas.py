"""Request bodies accepted by the JSON endpoints."""

from social_toolkit.social_database.data_models.base import SocialModel


class LoginRequest(SocialModel):
    email: str
    password: str


class CategoryCreate(SocialModel):
    name: str | None = None
    description: str | None = None


class CommentCreate(SocialModel):
    content: str | None = None


class MessageCreate(SocialModel):
    receiver_id: int
    content: str | None = None


class MessageUpdate(SocialModel):
    content: str | None = None
