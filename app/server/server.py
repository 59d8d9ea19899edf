from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from infrastructure.services import get_settings
from server.lifespan import lifespan
from server.middleware import request_logging_context

LOCAL_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


def cors_origins(settings) -> list[str]:
    """Browser origins allowed to call the API and open the notifications socket."""
    if not settings.is_production:
        return LOCAL_ORIGINS
    return [
        url
        for url in (settings.server.FRONTEND_URL, settings.server.CLIENT_URL)
        if url
    ]


handler = FastAPI(title="Notification Service", lifespan=lifespan)
setup_rate_limiter(handler)

handler.middleware("http")(request_logging_context)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(get_settings()),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

handler.include_router(api_router)
