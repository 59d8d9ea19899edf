"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.email import EmailSettings
from infrastructure.configuration.integrations.firebase import FirebaseSettings
from infrastructure.configuration.integrations.mongodb import MongoDBSettings
from infrastructure.configuration.integrations.telegram import TelegramSettings

__all__ = [
    "EmailSettings",
    "FirebaseSettings",
    "MongoDBSettings",
    "TelegramSettings",
]
