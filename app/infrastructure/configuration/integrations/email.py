"""SMTP email integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class EmailSettings(IntegrationSettings):
    """Outbound email configuration.

    Environment Variables:
        SMTP_HOST: SMTP server host; email delivery is disabled when empty
        SMTP_PORT: SMTP server port (default: 587)
        SMTP_USERNAME: SMTP login
        SMTP_PASSWORD: SMTP password
        SMTP_USE_TLS: Upgrade the connection with STARTTLS (default: True)
        SMTP_TIMEOUT_SECONDS: Socket timeout (default: 30)
        EMAIL_SENDER: From address for notification emails
        EMAIL_TEMPLATES_DIR: Override for the HTML template directory

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        if settings.email.is_configured:
            host = settings.email.SMTP_HOST
        ```
    """

    SMTP_HOST: str | None = Field(default=None, alias="SMTP_HOST")
    SMTP_PORT: int = Field(default=587, alias="SMTP_PORT")
    SMTP_USERNAME: str | None = Field(default=None, alias="SMTP_USERNAME")
    SMTP_PASSWORD: str | None = Field(default=None, alias="SMTP_PASSWORD")
    SMTP_USE_TLS: bool = Field(default=True, alias="SMTP_USE_TLS")
    SMTP_TIMEOUT_SECONDS: int = Field(default=30, alias="SMTP_TIMEOUT_SECONDS")
    EMAIL_SENDER: str = Field(default="no-reply@localhost", alias="EMAIL_SENDER")
    EMAIL_TEMPLATES_DIR: str | None = Field(default=None, alias="EMAIL_TEMPLATES_DIR")

    @property
    def is_configured(self) -> bool:
        return bool(self.SMTP_HOST)
