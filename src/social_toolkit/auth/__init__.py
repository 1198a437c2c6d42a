from social_toolkit.auth.base import CredentialProvider
from social_toolkit.auth.jwt import JWTCredentialProvider

__all__ = ["CredentialProvider", "JWTCredentialProvider"]
