"""Telegram bot integration."""

from integrations.telegram.client import ChatNotifier

__all__ = ["ChatNotifier"]
