"""Server infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Server and application runtime configuration.

    Environment Variables:
        FRONTEND_URL: Public web app URL used in email links
        CLIENT_URL: Dashboard URL used to build transaction detail links

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        frontend_url = settings.server.FRONTEND_URL
        ```
    """

    FRONTEND_URL: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")
    CLIENT_URL: str = Field(default="http://localhost:3000", alias="CLIENT_URL")
