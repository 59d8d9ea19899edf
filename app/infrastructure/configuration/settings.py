"""Root settings object composed of per-concern groups."""

from pydantic import Field
from pydantic_settings import BaseSettings

from infrastructure.configuration.base import ENV_SETTINGS_CONFIG
from infrastructure.configuration.infrastructure import (
    IdempotencySettings,
    ServerSettings,
)
from infrastructure.configuration.integrations import (
    EmailSettings,
    FirebaseSettings,
    MongoDBSettings,
    TelegramSettings,
)


class Settings(BaseSettings):
    """Notification service settings.

    Root variables:
        PREFIX: Deployment prefix; empty in production
        LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
        GIT_SHA: Commit deployed, reported by ``/version``
        APP_NAME: Product name used in email subjects and templates

    Every group reads its own variables from the environment when the
    root object is created; pass a group instance to override it:

        settings = Settings(telegram=TelegramSettings(TELEGRAM_BOT_TOKEN="123:abc"))
    """

    model_config = ENV_SETTINGS_CONFIG

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"
    APP_NAME: str = "MyPts"

    mongodb: MongoDBSettings = Field(default_factory=MongoDBSettings)
    firebase: FirebaseSettings = Field(default_factory=FirebaseSettings)
    email: EmailSettings = Field(default_factory=EmailSettings)
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)

    server: ServerSettings = Field(default_factory=ServerSettings)
    idempotency: IdempotencySettings = Field(default_factory=IdempotencySettings)

    @property
    def is_production(self) -> bool:
        return not self.PREFIX
