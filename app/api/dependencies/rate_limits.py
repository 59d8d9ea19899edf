from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address


def user_or_remote_address(request: Request) -> str:
    """Rate limit per caller when ``X-User-Id`` is present, else per client IP."""
    user_id = request.headers.get("X-User-Id")
    if user_id:
        return f"user:{user_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=user_or_remote_address)


async def rate_limit_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 with the exceeded limit, e.g. ``{"message": ..., "limit": "60 per 1 minute"}``."""
    return JSONResponse(
        status_code=429,
        content={"message": "Rate limit exceeded", "limit": str(exc.detail)},
    )


def setup_rate_limiter(app: FastAPI) -> None:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter() -> Limiter:
    return limiter
