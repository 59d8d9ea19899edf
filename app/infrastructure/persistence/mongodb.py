"""MongoDB client and collection setup.

Identifiers travel through the application as strings and are converted to
ObjectIds only here, at the store boundary.
"""

from datetime import datetime, timezone
from typing import Any, List

from bson import Decimal128, ObjectId
from pymongo import ASCENDING, DESCENDING, IndexModel, MongoClient
from pymongo.database import Database

from infrastructure.configuration.integrations.mongodb import MongoDBSettings
from infrastructure.logging import get_module_logger

logger = get_module_logger()

NOTIFICATIONS_COLLECTION = "notifications"
USERS_COLLECTION = "users"
PROFILES_COLLECTION = "profiles"


def create_client(settings: MongoDBSettings) -> MongoClient:
    """Create a pooled client. Connection happens lazily on first use."""
    client = MongoClient(
        settings.MONGODB_URI,
        serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        tz_aware=True,
    )
    logger.info("mongodb_client_created", database=settings.MONGODB_DATABASE)
    return client


def get_database(client: MongoClient, settings: MongoDBSettings) -> Database:
    return client[settings.MONGODB_DATABASE]


def as_object_id(value: Any) -> Any:
    """ObjectId for valid hex ids; anything else is returned unchanged.

    An invalid id therefore yields a filter that matches nothing instead of
    raising.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


NOTIFICATION_INDEXES = [
    IndexModel([("recipient", ASCENDING)], name="recipient_1"),
    IndexModel(
        [("recipient", ASCENDING), ("isRead", ASCENDING), ("createdAt", DESCENDING)],
        name="recipient_1_isRead_1_createdAt_-1",
    ),
    IndexModel(
        [
            ("recipient", ASCENDING),
            ("isArchived", ASCENDING),
            ("createdAt", DESCENDING),
        ],
        name="recipient_1_isArchived_1_createdAt_-1",
    ),
    # Expired records are removed by the store itself.
    IndexModel(
        [("expiresAt", ASCENDING)],
        name="expiresAt_1",
        expireAfterSeconds=0,
        partialFilterExpression={"expiresAt": {"$exists": True}},
    ),
]


def ensure_indexes(database: Database) -> List[str]:
    """Create the notification indexes (no-op when they already exist)."""
    names = database[NOTIFICATIONS_COLLECTION].create_indexes(NOTIFICATION_INDEXES)
    logger.info("mongodb_indexes_ensured", collection=NOTIFICATIONS_COLLECTION, indexes=names)
    return names


def plain_bson_values(value: Any) -> Any:
    """Recursively replace ObjectIds with hex strings and Decimal128 with Decimal."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, dict):
        return {key: plain_bson_values(item) for key, item in value.items()}
    if isinstance(value, list):
        return [plain_bson_values(item) for item in value]
    return value
