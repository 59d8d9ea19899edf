"""Environment-driven settings (pydantic-settings).

``Settings`` composes one group per integration (``mongodb``, ``firebase``,
``email``, ``telegram``) and per infrastructure concern (``idempotency``,
``server``). Application code reads it through the cached provider:

    from infrastructure.services import get_settings

    settings = get_settings()
    if settings.telegram.is_configured:
        ...
"""

from infrastructure.configuration.settings import Settings

__all__ = ["Settings"]
