import datetime
import logging
import re
from typing import Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from presensi.core.config import Settings

logger = logging.getLogger("security")

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"

PIN_LENGTH = 6
PIN_PATTERN = re.compile(rf"\d{{{PIN_LENGTH}}}")


class TokenError(Exception):
    pass


class TokenService:
    """Penerbitan & verifikasi JWT (access + refresh) dengan secret dari Settings."""

    def __init__(self, settings: Settings):
        self.secret = settings.JWT_SECRET
        self.algorithm = settings.JWT_ALGORITHM
        self.access_lifetime = settings.access_token_lifetime
        self.refresh_lifetime = settings.refresh_token_lifetime

    def _require_secret(self):
        if not self.secret:
            raise TokenError("JWT_SECRET belum di-set")

    def _sign(self, payload: dict, lifetime: datetime.timedelta, token_type: str) -> str:
        self._require_secret()
        now = datetime.datetime.now(datetime.timezone.utc)
        to_encode = payload.copy()
        to_encode.update({"exp": now + lifetime, "iat": now, "type": token_type})
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def create_access_token(self, payload: dict) -> str:
        return self._sign(payload, self.access_lifetime, TOKEN_TYPE_ACCESS)

    def create_refresh_token(self, payload: dict) -> str:
        return self._sign(payload, self.refresh_lifetime, TOKEN_TYPE_REFRESH)

    def verify_token(self, token: str, expected_type: Optional[str] = None) -> dict:
        self._require_secret()
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenError("Token expired")
        except JWTError:
            raise TokenError("Invalid token")

        if expected_type and claims.get("type") != expected_type:
            raise TokenError(f"Token bukan {expected_type} token")
        return claims


def hash_pin(pin: str) -> str:
    return bcrypt.hashpw(pin.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def is_valid_pin_format(pin: str) -> bool:
    return bool(PIN_PATTERN.fullmatch(pin or ""))


def verify_pin(pin: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    # Hash dari Laravel/Node memakai prefix $2y$
    if hashed.startswith("$2y$"):
        hashed = "$2b$" + hashed[4:]
    try:
        return bcrypt.checkpw(pin.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Format hash PIN tidak dikenali")
        return False


def warn_if_secret_missing(settings: Settings):
    if not settings.JWT_SECRET:
        logger.warning("WARNING: JWT_SECRET tidak di-set! Gunakan .env untuk production.")
