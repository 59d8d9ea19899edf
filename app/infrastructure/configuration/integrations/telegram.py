"""Telegram bot integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class TelegramSettings(IntegrationSettings):
    """Telegram Bot API configuration.

    Environment Variables:
        TELEGRAM_BOT_TOKEN: Bot token; chat delivery is disabled when empty
        TELEGRAM_API_URL: Bot API base URL (default: https://api.telegram.org)
        TELEGRAM_TIMEOUT_SECONDS: Per-request timeout (default: 10)
    """

    TELEGRAM_BOT_TOKEN: str | None = Field(default=None, alias="TELEGRAM_BOT_TOKEN")
    TELEGRAM_API_URL: str = Field(
        default="https://api.telegram.org", alias="TELEGRAM_API_URL"
    )
    TELEGRAM_TIMEOUT_SECONDS: int = Field(default=10, alias="TELEGRAM_TIMEOUT_SECONDS")

    @property
    def is_configured(self) -> bool:
        return bool(self.TELEGRAM_BOT_TOKEN)
