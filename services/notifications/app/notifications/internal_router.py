from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.notifications import controller
from app.notifications.schemas import CreateNotificationRequest, CreateNotificationResponse

router = APIRouter(prefix="/notifications/internal", tags=["Notifications"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateNotificationResponse,
    summary="Internal: store a notification (service-to-service).",
)
async def create_notification_internal(
    body: CreateNotificationRequest,
    db: AsyncSession = Depends(get_db),
) -> CreateNotificationResponse:
    return await controller.create_notification(body, db)
