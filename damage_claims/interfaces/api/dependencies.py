"""FastAPI dependency utilities."""

from fastapi import HTTPException, Request, status

from damage_claims.infrastructure.notifications import NotificationDispatcher


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    """Return the dispatcher created when the application started."""

    dispatcher = getattr(request.app.state, "notification_dispatcher", None)
    if dispatcher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification delivery is not initialised",
        )
    return dispatcher
