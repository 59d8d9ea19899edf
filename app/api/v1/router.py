from fastapi import APIRouter

from api.v1.routes.notifications import router as notifications_router
from api.v1.routes.notifications import ws_router as notifications_ws_router

router = APIRouter()
router.include_router(notifications_router)

# Websocket routes are mounted at the application root.
ws_router = APIRouter()
ws_router.include_router(notifications_ws_router)
