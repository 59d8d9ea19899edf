from typing import Optional

from fastapi import (
    APIRouter,
    HTTPException,
    Query,
    Request,
    WebSocket,
    WebSocketDisconnect,
)

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import (
    ConnectionManagerDep,
    NotificationServiceDep,
    UserIdDep,
)

logger = get_module_logger()

router = APIRouter(prefix="/notifications", tags=["Notifications"])
ws_router = APIRouter(tags=["Notifications"])
limiter = get_limiter()

NOT_FOUND_DETAIL = "Notification not found"


@router.get("")
@limiter.limit("120/minute")
def list_notifications(
    request: Request,  # pylint: disable=unused-argument
    service: NotificationServiceDep,
    user_id: UserIdDep,
    is_read: Optional[bool] = Query(default=None, alias="isRead"),
    is_archived: bool = Query(default=False, alias="isArchived"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
):
    """
    List the caller's notifications, newest first.

    Args:
        request (Request): The FastAPI request object (rate limiting).
        service (NotificationService): Notification record service.
        user_id (str): Caller id from the ``X-User-Id`` header.
        is_read (bool, optional): Filter on read state; both when omitted.
        is_archived (bool): Archived notifications instead of active ones.
        page (int): 1-based page number.
        limit (int): Page size.

    Returns:
        dict: ``notifications`` and ``pagination`` (total, pages, page, limit).
    """
    result = service.get_user_notifications(
        user_id, is_read=is_read, is_archived=is_archived, limit=limit, page=page
    )
    return {
        "notifications": [n.to_payload() for n in result["notifications"]],
        "pagination": result["pagination"],
    }


@router.get("/unread-count")
@limiter.limit("120/minute")
def get_unread_count(
    request: Request,  # pylint: disable=unused-argument
    service: NotificationServiceDep,
    user_id: UserIdDep,
):
    """Number of unread, unarchived notifications for the caller."""
    return {"count": service.get_unread_count(user_id)}


@router.patch("/read-all")
@limiter.limit("30/minute")
def mark_all_as_read(
    request: Request,  # pylint: disable=unused-argument
    service: NotificationServiceDep,
    user_id: UserIdDep,
):
    return {"modified": service.mark_all_as_read(user_id)}


@router.patch("/{notification_id}/read")
@limiter.limit("60/minute")
def mark_as_read(
    request: Request,  # pylint: disable=unused-argument
    notification_id: str,
    service: NotificationServiceDep,
    user_id: UserIdDep,
):
    notification = service.mark_as_read(notification_id, user_id)
    if notification is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return notification.to_payload()


@router.patch("/{notification_id}/archive")
@limiter.limit("60/minute")
def archive_notification(
    request: Request,  # pylint: disable=unused-argument
    notification_id: str,
    service: NotificationServiceDep,
    user_id: UserIdDep,
):
    notification = service.archive_notification(notification_id, user_id)
    if notification is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return notification.to_payload()


@router.delete("/{notification_id}")
@limiter.limit("60/minute")
def delete_notification(
    request: Request,  # pylint: disable=unused-argument
    notification_id: str,
    service: NotificationServiceDep,
    user_id: UserIdDep,
):
    notification = service.delete_notification(notification_id, user_id)
    if notification is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return {"message": "Notification deleted", "id": notification.id}


@ws_router.websocket("/ws/notifications")
async def notifications_socket(
    websocket: WebSocket,
    manager: ConnectionManagerDep,
    user_id: Optional[str] = Query(default=None, alias="userId"),
):
    """
    Subscribe to ``notification:new`` events for one user.

    The user id comes from the ``userId`` query parameter or the
    ``X-User-Id`` header. Clients may send ``ping`` to receive ``pong``.
    """
    user_id = user_id or websocket.headers.get("x-user-id")
    if not user_id:
        await websocket.close(code=1008)
        return

    await manager.connect(user_id, websocket)
    try:
        while True:
            message = await websocket.receive_text()
            if message == "ping":
                await websocket.send_text("pong")
    except WebSocketDisconnect:
        logger.debug("realtime_client_disconnected", user_id=user_id)
    finally:
        manager.disconnect(user_id, websocket)
