"""Portal configuration.

Settings come from environment variables, optionally loaded from a ``.env``
file next to the repository root.

Usage:
    from core.config import get_settings

    settings = get_settings()
    settings.recent_items  # 5
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime settings for the portal API."""
    env: str = "development"
    log_level: str = "INFO"
    log_json: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    recent_items: int = 5
    session_ttl_minutes: int = 480

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        return cls(
            env=os.getenv("PORTAL_ENV", "development"),
            log_level=os.getenv("PORTAL_LOG_LEVEL", "INFO").upper(),
            log_json=_env_bool("PORTAL_LOG_JSON", False),
            cors_origins=_env_list("PORTAL_CORS_ORIGINS", ["*"]),
            recent_items=_env_int("PORTAL_RECENT_ITEMS", 5),
            session_ttl_minutes=_env_int("PORTAL_SESSION_TTL_MINUTES", 480),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings (read once)."""
    return Settings.from_env()
