from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="forbid")

    # Optional at load time: the seed route reports a missing URL per request.
    postgres_url: str | None = None
    log_level: str = "info"
    host: str = "127.0.0.1"
    port: int = 8000

    bcrypt_rounds: int = 10
    tracing_enabled: bool = False


SETTINGS = DashboardSettings()


def get_settings() -> DashboardSettings:
    return DashboardSettings()
