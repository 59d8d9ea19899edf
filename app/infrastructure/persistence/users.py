"""User store: recipient preferences and push target pruning."""

from typing import Any, Dict, Iterable, Optional, Sequence

from pymongo.database import Database

from infrastructure.logging import get_module_logger
from infrastructure.notifications.preferences import RECIPIENT_FIELDS, Recipient
from infrastructure.persistence.mongodb import USERS_COLLECTION, as_object_id

logger = get_module_logger()


def _projection(fields: Iterable[str]) -> Dict[str, int]:
    return {field: 1 for field in fields}


class UserRepository:
    """Read access to ``users``; the only write is removing push tokens."""

    def __init__(self, database: Database):
        self._collection = database[USERS_COLLECTION]

    def find_by_id(
        self, user_id: str, fields: Sequence[str] = ()
    ) -> Optional[Dict[str, Any]]:
        projection = _projection(fields) if fields else None
        return self._collection.find_one({"_id": as_object_id(user_id)}, projection)

    def find_recipient(self, user_id: str) -> Optional[Recipient]:
        """Load the user with exactly the fields delivery needs."""
        document = self.find_by_id(user_id, RECIPIENT_FIELDS)
        return Recipient.from_document(document) if document else None

    def remove_push_tokens(self, user_id: str, tokens: Sequence[str]) -> int:
        """Pull every device whose push token is in ``tokens``."""
        if not tokens:
            return 0
        result = self._collection.update_one(
            {"_id": as_object_id(user_id)},
            {"$pull": {"devices": {"pushToken": {"$in": list(tokens)}}}},
        )
        logger.info(
            "push_devices_removed",
            user_id=user_id,
            requested=len(tokens),
            modified=result.modified_count,
        )
        return result.modified_count
