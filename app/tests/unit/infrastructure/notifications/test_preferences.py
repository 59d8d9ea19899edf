"""Unit tests for recipient parsing and category gating."""

import pytest

from infrastructure.notifications import (
    CategoryPreferences,
    Recipient,
    is_category_allowed,
)


@pytest.mark.unit
class TestRecipient:
    def test_missing_sections_default_to_disabled(self):
        recipient = Recipient.from_document(
            {"_id": "u1", "notifications": None, "telegramNotifications": None}
        )

        assert recipient.notifications.push is False
        assert recipient.notifications.email is False
        assert recipient.telegram.enabled is False
        assert recipient.push_tokens == []

    def test_null_switches_default_to_disabled(self):
        recipient = Recipient.from_document(
            {
                "_id": "u1",
                "notifications": {"push": None, "email": True},
                "telegramNotifications": {"enabled": None, "username": None},
            }
        )

        assert recipient.notifications.push is False
        assert recipient.notifications.email is True
        assert recipient.telegram.enabled is False
        assert recipient.telegram.chat_target is None

    def test_push_tokens_skip_blank_devices(self, user_document_factory):
        document = user_document_factory()
        document["devices"] = [{"pushToken": "a"}, {}, {"pushToken": ""}, {"pushToken": "b"}]

        assert Recipient.from_document(document).push_tokens == ["a", "b"]

    def test_display_name_fallbacks(self):
        assert Recipient.from_document({"_id": "u1", "fullName": "Ada L"}).display_name == "Ada L"
        assert Recipient.from_document({"_id": "u1", "firstName": "Ada"}).display_name == "Ada"
        assert Recipient.from_document({"_id": "u1"}).display_name == "User"

    def test_chat_target_prefers_stable_id(self):
        recipient = Recipient.from_document(
            {
                "_id": "u1",
                "telegramNotifications": {
                    "enabled": True,
                    "username": "ada",
                    "telegramId": 123456,
                },
            }
        )

        assert recipient.telegram.chat_target == "123456"

    def test_chat_target_falls_back_to_handle(self):
        recipient = Recipient.from_document(
            {"_id": "u1", "telegramNotifications": {"enabled": True, "username": "ada"}}
        )

        assert recipient.telegram.chat_target == "ada"


@pytest.mark.unit
class TestIsCategoryAllowed:
    def test_missing_preferences_allow(self, transaction_notification_factory):
        assert is_category_allowed(transaction_notification_factory(), None) is True

    def test_unset_flags_allow(self, transaction_notification_factory):
        assert (
            is_category_allowed(transaction_notification_factory(), CategoryPreferences())
            is True
        )

    def test_purchase_opt_out_blocks_buy(self, transaction_notification_factory):
        preferences = CategoryPreferences(purchaseConfirmations=False)

        assert is_category_allowed(transaction_notification_factory("BUY_MYPTS"), preferences) is False
        assert is_category_allowed(transaction_notification_factory("SELL_MYPTS"), preferences) is True

    def test_sale_opt_out_blocks_sell(self, transaction_notification_factory):
        preferences = CategoryPreferences(saleConfirmations=False)

        assert is_category_allowed(transaction_notification_factory("SELL_MYPTS"), preferences) is False
        assert is_category_allowed(transaction_notification_factory("BUY_MYPTS"), preferences) is True

    def test_transactions_opt_out_blocks_all_transactions(
        self, transaction_notification_factory
    ):
        preferences = CategoryPreferences(transactions=False, purchaseConfirmations=True)

        assert is_category_allowed(transaction_notification_factory("BUY_MYPTS"), preferences) is False
        assert is_category_allowed(transaction_notification_factory("TRANSFER"), preferences) is False

    def test_security_opt_out(self, notification_factory):
        alert = notification_factory(type="security_alert")

        assert is_category_allowed(alert, CategoryPreferences(security=False)) is False
        assert is_category_allowed(alert, CategoryPreferences(security=True)) is True

    def test_other_types_always_allowed(self, notification_factory):
        preferences = CategoryPreferences(
            transactions=False, security=False, connectionRequests=False, messages=False
        )

        assert is_category_allowed(notification_factory(type="connection_request"), preferences) is True
        assert is_category_allowed(notification_factory(type="message_received"), preferences) is True
