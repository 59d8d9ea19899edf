"""Recipient delivery preferences and category gating.

The recipient is loaded from the users collection with an explicit
projection (see ``RECIPIENT_FIELDS``). All channels decide category
eligibility through :func:`is_category_allowed`.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.notifications.models import Notification, NotificationType

RECIPIENT_FIELDS = (
    "email",
    "fullName",
    "firstName",
    "lastName",
    "unsubscribeToken",
    "notifications",
    "telegramNotifications",
    "devices",
)

PURCHASE_TRANSACTION = "BUY_MYPTS"
SALE_TRANSACTION = "SELL_MYPTS"


class CategoryPreferences(BaseModel):
    """Per-category opt-outs.

    ``None`` means the user never expressed a choice; only an explicit
    ``False`` suppresses delivery.
    """

    model_config = ConfigDict(extra="ignore")

    transactions: Optional[bool] = None
    transactionUpdates: Optional[bool] = None
    purchaseConfirmations: Optional[bool] = None
    saleConfirmations: Optional[bool] = None
    security: Optional[bool] = None
    connectionRequests: Optional[bool] = None
    messages: Optional[bool] = None


class ChannelToggles(BaseModel):
    """Push / email switches from ``user.notifications``."""

    model_config = ConfigDict(extra="ignore")

    push: bool = False
    email: bool = False
    preferences: Optional[CategoryPreferences] = None

    @field_validator("push", "email", mode="before")
    @classmethod
    def null_means_off(cls, v: Any) -> Any:
        return False if v is None else v


class ChatSettings(BaseModel):
    """Chat bot settings from ``user.telegramNotifications``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = False
    username: Optional[str] = None
    telegram_id: Optional[str] = Field(default=None, alias="telegramId")
    preferences: Optional[CategoryPreferences] = None

    @field_validator("enabled", mode="before")
    @classmethod
    def null_means_disabled(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("telegram_id", "username", mode="before")
    @classmethod
    def coerce_chat_ids(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @property
    def chat_target(self) -> Optional[str]:
        """Stable id when known, else the handle."""
        return self.telegram_id or self.username or None


class Device(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    push_token: Optional[str] = Field(default=None, alias="pushToken")


class Recipient(BaseModel):
    """Notification recipient with the preference fields delivery needs.

    Example:
        recipient = Recipient.from_document(
            {
                "_id": ObjectId("65f0c1d2e3a4b5c6d7e8f901"),
                "email": "ada@example.com",
                "notifications": {"push": False, "email": True},
            }
        )
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    email: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    unsubscribe_token: Optional[str] = Field(default=None, alias="unsubscribeToken")
    notifications: ChannelToggles = Field(default_factory=ChannelToggles)
    telegram: ChatSettings = Field(
        default_factory=ChatSettings, alias="telegramNotifications"
    )
    devices: List[Device] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("notifications", "telegram", mode="before")
    @classmethod
    def default_missing_sections(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("devices", mode="before")
    @classmethod
    def default_missing_devices(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def display_name(self) -> str:
        return self.full_name or self.first_name or "User"

    @property
    def push_tokens(self) -> List[str]:
        """Registered push tokens, in device order, without blanks."""
        return [device.push_token for device in self.devices if device.push_token]

    @classmethod
    def from_document(cls, document: dict) -> "Recipient":
        return cls.model_validate(document)


def is_category_allowed(
    notification: Notification, preferences: Optional[CategoryPreferences]
) -> bool:
    """Decide whether a notification's category may be delivered.

    Shared by every channel. Missing preferences allow everything.
    Transaction-linked system notifications are gated by the purchase or
    sale flag for BUY_MYPTS / SELL_MYPTS and by ``transactions`` for all of
    them; security alerts are gated by ``security``. Other types always pass.
    """
    if preferences is None:
        return True

    if notification.is_transaction_notification:
        transaction_type = notification.metadata.get("transactionType")
        if (
            transaction_type == PURCHASE_TRANSACTION
            and preferences.purchaseConfirmations is False
        ):
            return False
        if (
            transaction_type == SALE_TRANSACTION
            and preferences.saleConfirmations is False
        ):
            return False
        return preferences.transactions is not False

    if notification.type == NotificationType.SECURITY_ALERT.value:
        return preferences.security is not False

    return True
