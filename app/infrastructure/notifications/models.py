"""Notification system core models.

The persisted notification record, its closed vocabularies, and the
per-channel delivery result used for observability.

Uses Pydantic BaseModel for:
- Runtime validation of the closed type / related-model / priority sets
- camelCase document keys (``isRead``, ``relatedTo``) with snake_case attributes
- Lossless conversion to and from store documents (``_id`` and ObjectIds as str)
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class NotificationType(str, Enum):
    """Closed set of notification categories."""

    PROFILE_VIEW = "profile_view"
    PROFILE_LIKE = "profile_like"
    CONNECTION_REQUEST = "connection_request"
    CONNECTION_ACCEPTED = "connection_accepted"
    PROFILE_CONNECTION_REQUEST = "profile_connection_request"
    PROFILE_CONNECTION_ACCEPTED = "profile_connection_accepted"
    PROFILE_COMMENT = "profile_comment"
    ENDORSEMENT_RECEIVED = "endorsement_received"
    MESSAGE_RECEIVED = "message_received"
    SECURITY_ALERT = "security_alert"
    SYSTEM_NOTIFICATION = "system_notification"
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
    BADGE_EARNED = "badge_earned"
    BADGE_SUGGESTION_APPROVED = "badge_suggestion_approved"
    BADGE_SUGGESTION_REJECTED = "badge_suggestion_rejected"
    BADGE_SUGGESTION_IMPLEMENTED = "badge_suggestion_implemented"
    MILESTONE_ACHIEVED = "milestone_achieved"
    SELL_SUBMITTED = "sell_submitted"
    SELL_REQUEST = "sell_request"
    SELL_COMPLETED = "sell_completed"
    BOOKING_REQUEST = "booking_request"
    REMINDER = "reminder"
    COMMUNITY_INVITATION = "community_invitation"
    COMMUNITY_GROUP_INVITATION_RESPONSE = "community_group_invitation_response"
    COMMUNITY_GROUP_INVITATION_REQUEST = "community_group_invitation_request"
    COMMUNITY_GROUP_INVITATION_ACCEPTED = "community_group_invitation_accepted"
    COMMUNITY_GROUP_INVITATION_CANCELLED = "community_group_invitation_cancelled"
    COMMUNITY_GROUP_INVITATION_REJECTED = "community_group_invitation_rejected"
    COMMUNITY_GROUP_INVITATION_PENDING = "community_group_invitation_pending"
    COMMUNITY_ANNOUNCEMENT = "community_announcement"
    COMMUNITY_REPORT = "community_report"


class RelatedModel(str, Enum):
    """Kinds of domain entity a notification can point at."""

    PROFILE = "Profile"
    USER = "User"
    COMMENT = "Comment"
    MESSAGE = "Message"
    TRANSACTION = "Transaction"
    EVENT = "Event"
    TASK = "Task"
    BOOKING = "Booking"
    PROFILE_CONNECTION = "ProfileConnection"
    COMMUNITY_GROUP_INVITATION = "CommunityGroupInvitation"


class NotificationPriority(str, Enum):
    """Notification priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationStatus(Enum):
    """Per-channel delivery outcome.

    Tracks delivery attempt outcome for observability only; nothing is
    retried or persisted based on it.
    """

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


def _stringify_id(value: Any) -> Any:
    """Render ObjectId (or any non-str identifier) as its string form."""
    if value is None or isinstance(value, str):
        return value
    return str(value)


class RelatedTo(BaseModel):
    """Reference to the domain object a notification concerns."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    model: RelatedModel
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return _stringify_id(v)


class NotificationAction(BaseModel):
    """Single call-to-action surfaced with the notification."""

    text: str = ""
    url: str = ""


MetadataInput = Union[Mapping[str, Any], BaseModel, Iterable[Tuple[str, Any]], None]


class NotificationMetadata(BaseModel):
    """Typed key-value store of auxiliary notification data.

    Known keys are declared below so readers can see which type uses what;
    anything else is kept as an extra. The store accepts a mapping, another
    pydantic model, or a list of key/value pairs, so the shape never drifts
    between representations. Always read through :meth:`get`.

    Documented keys by notification kind:
        transactions: transactionType, amount, balance, status, timestamp
        reminders: reminderType, itemTitle, eventType
        events/bookings: eventType, eventName, eventDate, bookingId, service,
            startTime, endTime, location, requester, duration, description,
            status, metadata (nested booking payload)
        connections: connectionType, connectionReason, source

    Example:
        metadata = NotificationMetadata.of([("transactionType", "BUY_MYPTS")])
        metadata.get("transactionType")  # "BUY_MYPTS"
        metadata.get("amount", 0)  # 0
    """

    model_config = ConfigDict(extra="allow")

    # transactions
    transactionType: Optional[Any] = None
    amount: Optional[Any] = None
    balance: Optional[Any] = None
    status: Optional[Any] = None
    timestamp: Optional[Any] = None
    # reminders
    reminderType: Optional[Any] = None
    itemTitle: Optional[Any] = None
    # events and bookings
    eventType: Optional[Any] = None
    eventName: Optional[Any] = None
    eventDate: Optional[Any] = None
    bookingId: Optional[Any] = None
    # connections
    connectionType: Optional[Any] = None
    connectionReason: Optional[Any] = None
    source: Optional[Any] = None

    @model_validator(mode="before")
    @classmethod
    def normalize_input(cls, data: Any) -> Any:
        return _as_plain_dict(data)

    @classmethod
    def of(cls, data: MetadataInput) -> "NotificationMetadata":
        """Build metadata from any supported representation."""
        if isinstance(data, NotificationMetadata):
            return data
        return cls.model_validate(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default`` when unset."""
        value = self.to_dict().get(key)
        return default if value is None else value

    def has_any(self, *keys: str) -> bool:
        """True if any of ``keys`` holds a truthy value."""
        return any(self.get(key) for key in keys)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of the keys that are actually set."""
        return self.model_dump(exclude_none=True)


def _as_plain_dict(data: Any) -> Dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_none=True)
    if isinstance(data, Mapping):
        return dict(data)
    if isinstance(data, (list, tuple)):
        return {key: value for key, value in data}
    raise ValueError(f"Unsupported metadata representation: {type(data).__name__}")


class Notification(BaseModel):
    """Persisted notification record.

    Attributes use snake_case; the store and the HTTP surface use the
    camelCase aliases (``isRead``, ``relatedTo``...). Identifiers are kept
    as strings; the persistence layer converts them to ObjectIds.

    Example:
        notification = Notification(
            recipient="65f0c1d2e3a4b5c6d7e8f901",
            type=NotificationType.CONNECTION_REQUEST,
            title="New Connection Request",
            message="Ada Lovelace wants to connect with you",
            action={"text": "View Request", "url": "/connections/requests/123"},
            priority=NotificationPriority.MEDIUM,
        )
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(default=None, alias="_id")
    recipient: str
    sender: Optional[str] = None
    type: NotificationType
    title: str
    message: str
    related_to: Optional[RelatedTo] = Field(default=None, alias="relatedTo")
    action: Optional[NotificationAction] = None
    priority: NotificationPriority = NotificationPriority.LOW
    is_read: bool = Field(default=False, alias="isRead")
    is_archived: bool = Field(default=False, alias="isArchived")
    metadata: NotificationMetadata = Field(default_factory=NotificationMetadata)
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("id", "recipient", "sender", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _stringify_id(v)

    @field_validator("recipient")
    @classmethod
    def validate_recipient(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Notification recipient is required")
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_metadata(cls, v: Any) -> Any:
        return NotificationMetadata.of(v)

    @property
    def is_transaction_notification(self) -> bool:
        """System notification linked to a Transaction."""
        return (
            self.type == NotificationType.SYSTEM_NOTIFICATION.value
            and self.related_to is not None
            and self.related_to.model == RelatedModel.TRANSACTION.value
        )

    @property
    def is_transaction_linked(self) -> bool:
        """Any notification whose related entity is a Transaction."""
        return (
            self.related_to is not None
            and self.related_to.model == RelatedModel.TRANSACTION.value
        )

    def to_document(self) -> Dict[str, Any]:
        """Store document (camelCase keys, unset fields omitted)."""
        document = self.model_dump(by_alias=True, exclude_none=True)
        document["metadata"] = self.metadata.to_dict()
        return document

    def to_payload(self) -> Dict[str, Any]:
        """JSON-safe representation for API responses and real-time events."""
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        payload["metadata"] = self.metadata.model_dump(mode="json", exclude_none=True)
        return payload

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Notification":
        return cls.model_validate(dict(document))


class NotificationResult(BaseModel):
    """Result of one channel's delivery attempt for one notification.

    Returned by NotificationChannel.send() and collected by the dispatcher.

    Example:
        result = NotificationResult(
            notification_id="65f0c1d2e3a4b5c6d7e8f901",
            channel="push",
            status=NotificationStatus.SENT,
            message="Delivered to 2 devices",
        )
    """

    notification_id: Optional[str] = None
    channel: str
    status: NotificationStatus
    message: str = ""
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if delivery was successful."""
        return self.status == NotificationStatus.SENT


class PushDeliveryReport(BaseModel):
    """Outcome of a multicast push send."""

    success_count: int = 0
    failure_count: int = 0
    invalid_targets: List[str] = Field(default_factory=list)
