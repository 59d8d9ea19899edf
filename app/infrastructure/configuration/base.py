"""Base classes for the settings groups composed by ``Settings``."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Environment variable names are matched exactly; unrelated keys in .env are ignored.
ENV_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
)


class IntegrationSettings(BaseSettings):
    """Credentials and endpoints for one outside system (MongoDB, FCM, SMTP, Telegram)."""

    model_config = ENV_SETTINGS_CONFIG

    @property
    def is_configured(self) -> bool:
        return True


class InfrastructureSettings(BaseSettings):
    """In-process behavior: dedup cache bounds, public URLs."""

    model_config = ENV_SETTINGS_CONFIG
