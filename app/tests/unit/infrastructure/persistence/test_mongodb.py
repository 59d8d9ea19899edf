"""Unit tests for MongoDB helpers."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from bson import Decimal128, ObjectId

from infrastructure.persistence.mongodb import (
    NOTIFICATION_INDEXES,
    as_object_id,
    ensure_indexes,
    plain_bson_values,
)


@pytest.mark.unit
class TestMongoHelpers:
    def test_valid_hex_becomes_object_id(self):
        assert as_object_id("65f0c1d2e3a4b5c6d7e8f901") == ObjectId("65f0c1d2e3a4b5c6d7e8f901")

    def test_invalid_id_is_unchanged(self):
        assert as_object_id("abc") == "abc"

    def test_stringify_nested(self):
        object_id = ObjectId()

        assert plain_bson_values({"a": [object_id, {"b": object_id}], "c": 1}) == {
            "a": [str(object_id), {"b": str(object_id)}],
            "c": 1,
        }

    def test_decimal128_becomes_decimal(self):
        assert plain_bson_values({"metadata": {"amount": Decimal128("100.50")}}) == {
            "metadata": {"amount": Decimal("100.50")}
        }

    def test_ensure_indexes_includes_ttl(self):
        database = MagicMock()
        collection = database.__getitem__.return_value
        collection.create_indexes.return_value = ["recipient_1"]

        assert ensure_indexes(database) == ["recipient_1"]
        collection.create_indexes.assert_called_once_with(NOTIFICATION_INDEXES)
        ttl = [index for index in NOTIFICATION_INDEXES if "expireAfterSeconds" in index.document]
        assert ttl[0].document["expireAfterSeconds"] == 0
