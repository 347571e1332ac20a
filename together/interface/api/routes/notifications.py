"""Notification routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status

from together.application.usecase.notification import (
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
)
from together.domain.service import JWTService
from together.interface.api.session import authenticate

router = APIRouter(
    prefix="/api/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=GetNotificationsResponse)
async def get_notifications(
    get_notifications_use_case: FromDishka[GetNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetNotificationsResponse:
    """Notifications of the current user, newest first, with their
    invitation, list and inviter resolved where possible."""
    payload = authenticate(jwt_service, auth_token, authorization)
    return await get_notifications_use_case.execute(
        GetNotificationsRequest(user_id=payload.user_id)
    )


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_notification_read(
    notification_id: UUID,
    mark_notification_read_use_case: FromDishka[MarkNotificationReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> None:
    payload = authenticate(jwt_service, auth_token, authorization)
    await mark_notification_read_use_case.execute(
        MarkNotificationReadRequest(
            notification_id=str(notification_id), user_id=payload.user_id
        )
    )
