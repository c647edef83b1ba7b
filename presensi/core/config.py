import re
from datetime import timedelta
from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days", "": "seconds"}


def parse_duration(value: str) -> timedelta:
    """Parse '24h', '7d', '30m', '3600' style durations (bare number = seconds)."""
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Format durasi tidak valid: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "Presensi API"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "Asia/Jakarta"

    # Database (MySQL)
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASS: str = ""
    DB_NAME: str = "presensi_fleur_atelier"
    DATABASE_URL: Optional[str] = None

    # JWT
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "24h"
    JWT_REFRESH_EXPIRES_IN: str = "7d"

    # Default office location, used when seeding an empty pengaturan table
    DEFAULT_OFFICE_LAT: float = -6.2
    DEFAULT_OFFICE_LONG: float = 106.816666
    DEFAULT_RADIUS_METERS: int = 100

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{quote_plus(self.DB_PASS)}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
        )

    @property
    def access_token_lifetime(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRES_IN)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return parse_duration(self.JWT_REFRESH_EXPIRES_IN)


@lru_cache
def get_settings() -> Settings:
    return Settings()
