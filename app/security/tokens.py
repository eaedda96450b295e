from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import jwt, JWTError

from app.config import settings


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


class TokenService:
    """Issues and verifies signed, time-limited access tokens.

    Tokens are stateless: expiry is the only lifetime bound, nothing is stored
    server side.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        if not secret_key:
            raise ValueError("A signing key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer
        self.audience = audience

    def issue(self, user_id: int, name: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "name": name,
            "email": email,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        sub = payload.get("sub")
        try:
            payload["user_id"] = int(sub)
        except (TypeError, ValueError):
            raise InvalidTokenError("Token subject is not a user id")
        return payload


@lru_cache()
def get_token_service() -> TokenService:
    return TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
    )
