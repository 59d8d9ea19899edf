"""Infrastructure modules for the notification service.

Centralized infrastructure components:
- configuration: Settings management (Settings and its sections)
- logging: Structured logging (configure_logging, get_module_logger)
- idempotency: Bounded in-memory idempotency cache
- notifications: Dispatcher, channels, outbox and deduplication guard
- operations: Operation results returned by provider clients
- persistence: MongoDB stores for notifications, users and profiles
- services: Dependency injection providers (SettingsDep, get_settings)
"""
