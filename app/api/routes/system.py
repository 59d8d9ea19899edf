from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.services import SettingsDep

router = APIRouter(tags=["System"])
limiter = get_limiter()


@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(request: Request):
    """Liveness plus the state of the dispatch outbox.

    The outbox is attached to ``app.state`` by the lifespan; before startup
    it is reported as stopped.
    """
    outbox = getattr(request.app.state, "outbox", None)
    return {
        "status": "ok",
        "outbox": "running" if outbox is not None and outbox.is_running else "stopped",
        "pending": outbox.pending() if outbox is not None else 0,
    }
