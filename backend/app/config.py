"""Application configuration."""
from collections import Counter
from functools import lru_cache
import math

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_PROTECTED_PREFIXES = [
    "/dashboard",
    "/policies",
    "/claims",
    "/documents",
    "/commissions",
    "/leads",
    "/users",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Kevo Insurance"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Database
    database_url: str = "sqlite:///./data/kevo.db"

    # Auth
    secret_key: str
    algorithm: str = "HS256"
    session_expire_minutes: int = 10
    session_cookie_name: str = "kevo_session"
    session_cookie_path: str = "/"
    session_cookie_samesite: str = "lax"
    session_cookie_secure: bool = True
    protected_prefixes: list[str] = DEFAULT_PROTECTED_PREFIXES

    # Notifications
    expiry_window_days: int = 10
    cron_secret: str | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Fail closed if SECRET_KEY is weak or placeholder quality."""
        if not value:
            raise ValueError("SECRET_KEY must be set.")

        if len(value) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters.")

        weak_values = {"changeme", "changeme-in-production", "secret", "password", "test"}
        lowered = value.lower()
        if lowered in weak_values or "changeme" in lowered:
            raise ValueError("SECRET_KEY must not be a placeholder value.")

        counts = Counter(value)
        entropy_per_char = -sum((count / len(value)) * math.log2(count / len(value)) for count in counts.values())
        estimated_entropy_bits = entropy_per_char * len(value)
        if estimated_entropy_bits < 100:
            raise ValueError("SECRET_KEY entropy is too low; use a cryptographically random value.")

        return value

    @field_validator("protected_prefixes")
    @classmethod
    def normalize_prefixes(cls, value: list[str]) -> list[str]:
        """Prefixes are matched on path segments, so drop trailing slashes."""
        normalized = []
        for prefix in value:
            prefix = "/" + prefix.strip().strip("/")
            if prefix == "/":
                raise ValueError("Protected prefixes must not be the site root.")
            normalized.append(prefix)
        return normalized

    @field_validator("expiry_window_days")
    @classmethod
    def validate_expiry_window(cls, value: int) -> int:
        if value < 1:
            raise ValueError("EXPIRY_WINDOW_DAYS must be at least 1.")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
