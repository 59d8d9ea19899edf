"""Notification record store."""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from infrastructure.notifications.models import Notification
from infrastructure.persistence.mongodb import (
    NOTIFICATIONS_COLLECTION,
    as_object_id,
    plain_bson_values,
    utc_now,
)

NEWEST_FIRST: Sequence[Tuple[str, int]] = (("createdAt", DESCENDING),)


def _to_notification(document: Mapping[str, Any]) -> Notification:
    return Notification.from_document(plain_bson_values(dict(document)))


class NotificationRepository:
    """CRUD access to the ``notifications`` collection.

    Filters use the stored camelCase keys. ``recipient`` and ``_id`` values
    may be passed as strings; they are converted to ObjectIds here.
    Store errors (``PyMongoError``) propagate to the caller.
    """

    def __init__(self, database: Database):
        self._collection = database[NOTIFICATIONS_COLLECTION]

    def create(self, notification: Notification) -> Notification:
        document = notification.to_document()
        document.pop("_id", None)
        now = utc_now()
        document["createdAt"] = now
        document["updatedAt"] = now
        document["recipient"] = as_object_id(document["recipient"])
        if "sender" in document:
            document["sender"] = as_object_id(document["sender"])
        if "relatedTo" in document:
            document["relatedTo"]["id"] = as_object_id(document["relatedTo"]["id"])

        result = self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return _to_notification(document)

    def find(
        self,
        filters: Mapping[str, Any],
        sort: Sequence[Tuple[str, int]] = NEWEST_FIRST,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Notification]:
        cursor = (
            self._collection.find(self._normalize(filters))
            .sort(list(sort))
            .skip(skip)
            .limit(limit)
        )
        return [_to_notification(document) for document in cursor]

    def find_one(self, filters: Mapping[str, Any]) -> Optional[Notification]:
        document = self._collection.find_one(self._normalize(filters))
        return _to_notification(document) if document else None

    def update_one(
        self, filters: Mapping[str, Any], changes: Mapping[str, Any]
    ) -> Optional[Notification]:
        """Apply ``changes`` to one record and return it as updated."""
        document = self._collection.find_one_and_update(
            self._normalize(filters),
            {"$set": {**changes, "updatedAt": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        return _to_notification(document) if document else None

    def update_many(
        self, filters: Mapping[str, Any], changes: Mapping[str, Any]
    ) -> int:
        result = self._collection.update_many(
            self._normalize(filters),
            {"$set": {**changes, "updatedAt": utc_now()}},
        )
        return result.modified_count

    def delete_one(self, filters: Mapping[str, Any]) -> Optional[Notification]:
        """Delete one record and return what was deleted."""
        document = self._collection.find_one_and_delete(self._normalize(filters))
        return _to_notification(document) if document else None

    def count(self, filters: Mapping[str, Any]) -> int:
        return self._collection.count_documents(self._normalize(filters))

    @staticmethod
    def _normalize(filters: Mapping[str, Any]) -> Dict[str, Any]:
        normalized = dict(filters)
        for key in ("_id", "recipient", "sender"):
            if key in normalized:
                normalized[key] = as_object_id(normalized[key])
        return normalized
