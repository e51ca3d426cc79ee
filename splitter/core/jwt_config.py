import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

from splitter.core.config import settings
from splitter.core.errors import Unauthenticated

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class TokenVerifier:
    """Issues and verifies signed bearer tokens carrying a user id in ``sub``."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_min: int = 60):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_min = expires_min

    def issue(self, subject_id: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expires_min),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise Unauthenticated("Not authorized, token expired")
        except InvalidTokenError as e:
            logger.warning("Rejected invalid token: %s", e)
            raise Unauthenticated("Not authorized")

    @staticmethod
    def extract_bearer(header_value: str | None) -> str:
        if not header_value or not header_value.startswith(BEARER_PREFIX):
            raise Unauthenticated("Not authorized, no token provided")

        token = header_value[len(BEARER_PREFIX):].strip()
        if not token:
            raise Unauthenticated("Not authorized, no token provided")

        return token

    def subject_id(self, header_value: str | None) -> int:
        """Return the user id a raw ``Authorization`` header value proves."""
        claims = self.decode(self.extract_bearer(header_value))
        sub = claims.get("sub")
        try:
            return int(sub)
        except (TypeError, ValueError):
            logger.warning("Token carries no usable subject claim")
            raise Unauthenticated("Not authorized")


@lru_cache
def get_token_verifier() -> TokenVerifier:
    return TokenVerifier(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGO,
        expires_min=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
