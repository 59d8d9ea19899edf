"""Firebase Cloud Messaging integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class FirebaseSettings(IntegrationSettings):
    """Firebase Cloud Messaging (HTTP v1) configuration.

    Push delivery is only wired when both the project id and the service
    account credentials file are configured.

    Environment Variables:
        FIREBASE_PROJECT_ID: Firebase project identifier
        FIREBASE_CREDENTIALS_FILE: Path to the service account JSON file
        FIREBASE_TIMEOUT_SECONDS: Per-request timeout (default: 10)
    """

    FIREBASE_PROJECT_ID: str | None = Field(default=None, alias="FIREBASE_PROJECT_ID")
    FIREBASE_CREDENTIALS_FILE: str | None = Field(
        default=None, alias="FIREBASE_CREDENTIALS_FILE"
    )
    FIREBASE_TIMEOUT_SECONDS: int = Field(default=10, alias="FIREBASE_TIMEOUT_SECONDS")

    @property
    def is_configured(self) -> bool:
        return bool(self.FIREBASE_PROJECT_ID and self.FIREBASE_CREDENTIALS_FILE)
