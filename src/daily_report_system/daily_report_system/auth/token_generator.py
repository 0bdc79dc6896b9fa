from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Protocol

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_ACCESS_TOKEN_DAYS, DEFAULT_JWT_ALGORITHM, DEFAULT_REFRESH_TOKEN_DAYS
from ..users.model import AuthToken

ACCESS = "access"
REFRESH = "refresh"


class TokenGenerator(Protocol):
    def generate(self, user_id: str, role: str) -> AuthToken:
        raise NotImplementedError

    def decode(self, token: str, *, expected_type: str = ACCESS) -> dict[str, Any]:
        """Return the claims or raise ``jwt.InvalidTokenError``."""
        raise NotImplementedError


class JwtTokenGenerator:
    """Signs access/refresh token pairs with PyJWT."""

    def __init__(
        self,
        secret: str,
        *,
        access_token_days: int = DEFAULT_ACCESS_TOKEN_DAYS,
        refresh_token_days: int = DEFAULT_REFRESH_TOKEN_DAYS,
        algorithm: str = DEFAULT_JWT_ALGORITHM,
        clock: Callable[[], datetime] = now_utc,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._access_ttl = timedelta(days=int(access_token_days))
        self._refresh_ttl = timedelta(days=int(refresh_token_days))
        self._algorithm = algorithm
        self._clock = clock

    def _sign(self, user_id: str, role: str, token_type: str, ttl: timedelta, issued_at: datetime) -> str:
        payload = {
            "sub": str(user_id),
            "role": getattr(role, "value", role),
            "type": token_type,
            "iat": issued_at,
            "exp": issued_at + ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def generate(self, user_id: str, role: str) -> AuthToken:
        now = self._clock()
        return AuthToken(
            access_token=self._sign(user_id, role, ACCESS, self._access_ttl, now),
            refresh_token=self._sign(user_id, role, REFRESH, self._refresh_ttl, now),
            expires_in=int(self._access_ttl.total_seconds()),
        )

    def decode(self, token: str, *, expected_type: str = ACCESS) -> dict[str, Any]:
        claims = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": ["sub", "exp", "type"]},
        )
        if claims.get("type") != expected_type:
            raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
        return claims
