from fastapi import Request

from infrastructure.logging import bind_request_context, get_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"


async def request_logging_context(request: Request, call_next):
    """Bind the caller and route to every log line emitted while handling a request.

    The correlation id is taken from ``X-Request-ID`` when the caller sends
    one and echoed back on the response.
    """
    with bind_request_context(
        correlation_id=request.headers.get(REQUEST_ID_HEADER),
        request_path=request.url.path,
        request_method=request.method,
        user_id=request.headers.get("X-User-Id"),
    ):
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = get_correlation_id() or ""
        return response
