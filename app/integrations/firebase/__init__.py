"""Firebase Cloud Messaging integration."""

from integrations.firebase.client import PushSender

__all__ = ["PushSender"]
