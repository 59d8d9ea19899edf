"""MongoDB integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class MongoDBSettings(IntegrationSettings):
    """MongoDB connection configuration.

    Environment Variables:
        MONGODB_URI: Connection string (default: mongodb://localhost:27017)
        MONGODB_DATABASE: Database holding users, profiles and notifications
        MONGODB_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        uri = settings.mongodb.MONGODB_URI
        ```
    """

    MONGODB_URI: str = Field(default="mongodb://localhost:27017", alias="MONGODB_URI")
    MONGODB_DATABASE: str = Field(default="myprofile", alias="MONGODB_DATABASE")
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000, alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS"
    )
