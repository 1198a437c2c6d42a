"""
Credential provider abstractions.

A 'CredentialProvider' owns everything the application knows about secrets:
hashing and checking passwords, and issuing and resolving the bearer tokens
that identify a user on HTTP requests and Socket.IO handshakes alike. The
toolkit ships one implementation, 'JWTCredentialProvider' (bcrypt + PyJWT).
"""

from abc import ABC, abstractmethod


class CredentialProvider(ABC):
    """
    Abstract base class for credential backends.

    'resolve_token' is the only entry point used by both outer surfaces; it
    must raise 'UnauthorizedError' for anything that does not identify a user.
    """

    @abstractmethod
    def hash_password(self, password: str) -> str:
        pass

    @abstractmethod
    def verify_password(self, password: str, password_hash: str) -> bool:
        pass

    @abstractmethod
    def issue_token(self, user_id: int) -> str:
        pass

    @abstractmethod
    def resolve_token(self, token: str) -> int:
        """Return the user id carried by 'token'.

        Raise 'UnauthorizedError' when the token is malformed, tampered with or expired.
        """
        pass
