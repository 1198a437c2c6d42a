from social_toolkit.api.routes import auth, categories, messages, notifications, posts, users

routers = [auth.router, users.router, categories.router, posts.router, notifications.router, messages.router]

__all__ = ["routers"]
