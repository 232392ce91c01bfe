# ticketdesk/auth/tokens.py
"""Signed session tokens and the cookie that carries them.

Tokens are compact HS256 JWTs with three claims: ``userId``, ``iat`` and
``exp``. Nothing is stored server side, so a token stays valid until it
expires or ``JWT_SECRET`` changes.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Request, Response
from jose import ExpiredSignatureError, JWTError, jwt

ALGORITHM = "HS256"


class TokenError(Exception):
    """Base for every way a session token can be rejected."""


class MalformedToken(TokenError):
    pass


class InvalidToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    issued_at: datetime
    expires_at: datetime


class TokenService:
    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(days=7),
        cookie_name: str = "ticketdesk_session",
        cookie_secure: bool = True,
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self.secret = secret
        self.ttl = ttl
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure

    def issue(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "userId": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        # Structure first, so a garbage cookie is not reported as a bad signature
        try:
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedToken(str(exc)) from exc

        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError as exc:
            raise ExpiredToken(str(exc)) from exc
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc

        user_id = payload.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise MalformedToken("userId claim must be an integer")
        if "exp" not in payload or "iat" not in payload:
            raise MalformedToken("iat and exp claims are required")

        return TokenClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(payload["iat"], timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
        )

    # Cookie helpers

    def set_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.ttl.total_seconds()),
            httponly=True,
            secure=self.cookie_secure,
            samesite="lax",
        )

    def get_cookie(self, request: Request) -> str | None:
        return request.cookies.get(self.cookie_name) or None

    def clear_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            httponly=True,
            secure=self.cookie_secure,
            samesite="lax",
        )
