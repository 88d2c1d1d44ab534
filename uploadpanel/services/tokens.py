from __future__ import annotations
import logging
import time
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from uploadpanel.config import ConfigError, TOKEN_ALGORITHM, TOKEN_TTL_SECONDS
from uploadpanel.errors import Unauthorized
from uploadpanel.models.auth import Role, TokenPayload

logger = logging.getLogger(__name__)


class TokenService:
    """Emissione/verifica dei token di sessione (stateless, HS256)."""

    def __init__(self, secret: str, ttl_seconds: int = TOKEN_TTL_SECONDS):
        if not secret:
            raise ConfigError("JWT_SECRET is not configured")
        self._secret = secret
        self.ttl_seconds = ttl_seconds

    def issue(self, subject: str, role: Role, now: Optional[int] = None) -> str:
        iat = int(time.time()) if now is None else int(now)
        claims = {"sub": subject, "role": Role(role).value, "iat": iat, "exp": iat + self.ttl_seconds}
        return jwt.encode(claims, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str, now: Optional[int] = None) -> TokenPayload:
        current = int(time.time()) if now is None else int(now)
        try:
            # la scadenza e' controllata qui sotto contro `now`
            claims = jwt.decode(token, self._secret, algorithms=[TOKEN_ALGORITHM],
                                options={"verify_exp": False})
            payload = TokenPayload(**claims)
        except (JWTError, PydanticValidationError, TypeError) as e:
            logger.debug("token rejected: %s", type(e).__name__)
            raise Unauthorized() from None
        if current > payload.exp:
            logger.debug("token rejected: expired")
            raise Unauthorized()
        return payload
