"""Notification endpoints for the current user."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.projecthub.api.dependencies import CurrentActor, NotificationServiceDep
from src.projecthub.models import NotificationCategory
from src.projecthub.schemas.notification import (
    MarkAllReadResponse,
    NotificationPage,
    NotificationPreferencesBody,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationPage)
async def list_notifications(
    actor: CurrentActor,
    service: NotificationServiceDep,
    unread_only: Annotated[bool, Query(alias="unreadOnly")] = False,
    category: NotificationCategory | None = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> NotificationPage:
    return await service.list_notifications(
        actor, unread_only=unread_only, category=category, cursor=cursor, limit=limit
    )


@router.get("/preferences", response_model=NotificationPreferencesBody)
async def get_preferences(
    actor: CurrentActor, service: NotificationServiceDep
) -> NotificationPreferencesBody:
    return NotificationPreferencesBody(preferences=await service.get_preferences(actor))


@router.put("/preferences", response_model=NotificationPreferencesBody)
async def update_preferences(
    body: NotificationPreferencesBody, actor: CurrentActor, service: NotificationServiceDep
) -> NotificationPreferencesBody:
    preferences = await service.update_preferences(actor, body.preferences)
    return NotificationPreferencesBody(preferences=preferences)


@router.put("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_read(
    actor: CurrentActor, service: NotificationServiceDep
) -> MarkAllReadResponse:
    updated = await service.mark_all_as_read(actor)
    return MarkAllReadResponse(updated=updated)


@router.put("/{notification_id}/read", response_model=NotificationRead)
async def mark_read(
    notification_id: UUID, actor: CurrentActor, service: NotificationServiceDep
) -> NotificationRead:
    notification = await service.mark_as_read(notification_id, actor)
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID, actor: CurrentActor, service: NotificationServiceDep
) -> None:
    await service.delete_notification(notification_id, actor)
