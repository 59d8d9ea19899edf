"""MongoDB persistence layer.

Repositories for notification records, recipient preferences and profiles.
"""

from infrastructure.persistence.mongodb import (
    as_object_id,
    create_client,
    ensure_indexes,
    get_database,
)
from infrastructure.persistence.notifications import NotificationRepository
from infrastructure.persistence.profiles import Profile, ProfileRepository
from infrastructure.persistence.users import UserRepository

__all__ = [
    "as_object_id",
    "create_client",
    "ensure_indexes",
    "get_database",
    "NotificationRepository",
    "Profile",
    "ProfileRepository",
    "UserRepository",
]
