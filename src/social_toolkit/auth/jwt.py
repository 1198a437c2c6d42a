from datetime import timedelta

import bcrypt
import jwt
from loguru import logger

from social_toolkit.auth.base import CredentialProvider
from social_toolkit.errors import UnauthorizedError
from social_toolkit.utils.time import utc_now


class JWTCredentialProvider(CredentialProvider):
    """bcrypt password hashes and signed JWT bearer tokens with a 'userId' claim."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    def issue_token(self, user_id: int) -> str:
        payload = {"userId": user_id, "exp": utc_now() + timedelta(minutes=self.expire_minutes)}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def resolve_token(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise UnauthorizedError("Invalid token") from e

        user_id = payload.get("userId")
        if not isinstance(user_id, int):
            raise UnauthorizedError("Invalid token")
        return user_id
