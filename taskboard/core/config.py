"""Settings for taskboard, read from environment variables and an optional .env.

Cache timings (TTLs, retry interval, timeouts) are checked when Settings loads.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings (field name == env var, case-insensitive).

    All settings have defaults suitable for local development: SQLite via
    aiosqlite for the task store and a Redis instance on localhost for the
    remote cache tier.
    """

    # App
    app_name: str = "taskboard"
    app_version: str = "1.0.0"
    debug: bool = False
    allowed_origins: str = "*"

    # Database
    database_url: str = "sqlite+aiosqlite:///./taskboard.db"
    database_echo: bool = False

    # Redis (remote cache tier)
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Tiered cache policy (seconds)
    cache_local_ttl_seconds: int = 600
    cache_remote_ttl_seconds: int = 600
    cache_retry_interval_seconds: int = 120
    cache_operation_timeout_seconds: float = 1.0
    cache_probe_timeout_seconds: float = 0.5
    cache_local_sweep_interval_seconds: int = 60

    # Per key family TTLs (seconds)
    cache_ttl_task: int = 1800
    cache_ttl_task_list: int = 300
    cache_ttl_categories: int = 3600

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_timings(self) -> "Settings":
        """Reject non-positive TTLs, retry interval and timeouts."""
        timings = {
            "cache_local_ttl_seconds": self.cache_local_ttl_seconds,
            "cache_remote_ttl_seconds": self.cache_remote_ttl_seconds,
            "cache_retry_interval_seconds": self.cache_retry_interval_seconds,
            "cache_operation_timeout_seconds": self.cache_operation_timeout_seconds,
            "cache_probe_timeout_seconds": self.cache_probe_timeout_seconds,
            "cache_local_sweep_interval_seconds": self.cache_local_sweep_interval_seconds,
            "cache_ttl_task": self.cache_ttl_task,
            "cache_ttl_task_list": self.cache_ttl_task_list,
            "cache_ttl_categories": self.cache_ttl_categories,
        }
        for name, value in timings.items():
            if value <= 0:
                raise ValueError(f"{name.upper()} must be positive, got: {value!r}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, built on first use.

    Tests that change env vars call get_settings.cache_clear() first.
    """
    return Settings()
