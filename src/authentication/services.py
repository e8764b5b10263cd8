"""Bearer credentials for identities: signed access/refresh JWTs and their revocation list."""

import logging
import time
import uuid
from datetime import timedelta
from typing import Any, NamedTuple

import jwt
import redis
from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import AuthenticationFailed

from core.redis_client import get_redis_client

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


class BlocklistUnavailable(Exception):
    """Raised when the Redis blocklist cannot be read or written (fail-closed)."""


class TokenPair(NamedTuple):
    access: str
    refresh: str


class TokenService:
    """Issue, verify, and revoke identity tokens.

    Claims carry the identity id (``sub``), its role at issue time, and a
    ``typ`` of access or refresh. The role claim is informational only; the
    middleware always re-reads the identity so role changes apply at once.
    Revocation is per token: the ``jti`` is stored in Redis until the
    token would have expired anyway.
    """

    LIFETIMES = {ACCESS: timedelta(minutes=15), REFRESH: timedelta(hours=24)}
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ["sub", "jti", "exp", "iat", "typ"]
    REVOKED_KEY = "travel-blog:revoked-jti:{jti}"

    @classmethod
    def issue_pair(cls, user) -> TokenPair:
        """Sign a fresh access and refresh token for ``user``."""
        issued_at = timezone.now()
        return TokenPair(
            access=cls._sign(user, ACCESS, issued_at),
            refresh=cls._sign(user, REFRESH, issued_at),
        )

    @classmethod
    def _sign(cls, user, token_type: str, issued_at) -> str:
        claims = {
            "sub": str(user.pk),
            "jti": uuid.uuid4().hex,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + cls.LIFETIMES[token_type]).timestamp()),
            "typ": token_type,
            "role": user.role,
        }
        return jwt.encode(claims, settings.SECRET_KEY, algorithm=cls.ALGORITHM)

    @classmethod
    def decode(cls, token: str, expected_type: str) -> dict[str, Any]:
        """Verify signature, expiry, required claims, and token type."""
        try:
            claims = jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[cls.ALGORITHM],
                options={"require": cls.REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc

        if claims["typ"] != expected_type:
            raise AuthenticationFailed(f"Expected a {expected_type} token")
        return claims

    @classmethod
    def revoke(cls, claims: dict[str, Any]) -> None:
        """Blocklist a decoded token until its own expiry."""
        ttl_seconds = max(1, int(claims["exp"]) - int(time.time()))
        try:
            get_redis_client().setex(cls.REVOKED_KEY.format(jti=claims["jti"]), ttl_seconds, "1")
        except redis.RedisError as exc:
            raise BlocklistUnavailable("Redis unavailable while revoking token") from exc
        logger.info("Revoked %s token %s of identity %s", claims["typ"], claims["jti"], claims["sub"])

    @classmethod
    def is_revoked(cls, jti: str) -> bool:
        try:
            return get_redis_client().get(cls.REVOKED_KEY.format(jti=jti)) is not None
        except redis.RedisError as exc:
            raise BlocklistUnavailable("Redis unavailable while checking revocations") from exc


__all__ = ["ACCESS", "REFRESH", "BlocklistUnavailable", "TokenPair", "TokenService"]
