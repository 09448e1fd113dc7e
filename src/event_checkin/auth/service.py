from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_utc
from ..core.constants import JWT_ALGORITHM, SCANNER_TOKEN_TTL_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class ScannerAuthService:
    """Use case: scanner login and token verification.

    One shared password, one role, stateless tokens. There are no per-user
    accounts, refresh tokens or revocation.
    """

    def __init__(
        self,
        *,
        secret: str,
        password: Optional[str] = None,
        password_hash: Optional[str] = None,
        ttl: timedelta = timedelta(hours=SCANNER_TOKEN_TTL_HOURS),
    ):
        self._secret = secret
        self._password = password or None
        self._password_hash = password_hash or None
        self._ttl = ttl

    def _password_matches(self, candidate: str) -> bool:
        if self._password_hash:
            try:
                return check_password_hash(self._password_hash, candidate)
            except ValueError:
                # Unsupported/corrupted hash in config.
                logger.error("SCANNER_PASSWORD_HASH is not a valid werkzeug hash")
                return False
        if self._password:
            return hmac.compare_digest(self._password.encode("utf-8"), candidate.encode("utf-8"))
        return False

    def login(self, password: Any, *, now: Optional[datetime] = None) -> str:
        if not isinstance(password, str) or not password or not self._password_matches(password):
            raise AuthenticationError("Invalid password")
        return self.issue_token(now=now)

    def issue_token(self, *, now: Optional[datetime] = None) -> str:
        if not self._secret:
            logger.error("JWT_SECRET is not configured; refusing to issue scanner tokens")
            raise AuthenticationError("Scanner login unavailable")
        now = now or now_utc()
        payload = {
            "role": Role.SCANNER.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: Optional[str]) -> Dict[str, Any]:
        """Return decoded claims or raise AuthenticationError."""
        if not token:
            raise AuthenticationError("Scanner login required")
        if not self._secret:
            raise AuthenticationError("Invalid/Expired token")

        try:
            claims = jwt.decode(
                token, self._secret, algorithms=[JWT_ALGORITHM], options={"require": ["exp", "role"]}
            )
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid/Expired token")

        if claims.get("role") != Role.SCANNER.value:
            raise AuthenticationError("Invalid/Expired token")
        return claims


def bearer_token(header: Optional[str]) -> Optional[str]:
    header = header or ""
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None
