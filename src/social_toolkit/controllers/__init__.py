from social_toolkit.controllers.categories import CategoryController
from social_toolkit.controllers.comments import CommentController
from social_toolkit.controllers.follows import FollowController
from social_toolkit.controllers.likes import LikeController
from social_toolkit.controllers.messages import MessageController
from social_toolkit.controllers.notifications import NotificationController
from social_toolkit.controllers.posts import PostController
from social_toolkit.controllers.users import UserController

__all__ = [
    "CategoryController",
    "CommentController",
    "FollowController",
    "LikeController",
    "MessageController",
    "NotificationController",
    "PostController",
    "UserController",
]
