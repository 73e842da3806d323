"""Settings read from the environment."""
import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    api_prefix: str = "/api"
    trend_days: int = 7
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        prefix = os.getenv("TASKBOARD_API_PREFIX", "/api").rstrip("/")
        return cls(
            redis_host=os.getenv("REDIS_HOST", "redis"),
            redis_port=_env_int("REDIS_PORT", 6379),
            redis_db=_env_int("REDIS_DB", 0),
            api_prefix=prefix,
            trend_days=max(1, _env_int("TASKBOARD_TREND_DAYS", 7)),
            log_level=os.getenv("TASKBOARD_LOG_LEVEL", "INFO").upper(),
        )


def get_settings() -> Settings:
    return Settings.from_env()
