from social_toolkit.api.app import create_app

__all__ = ["create_app"]
