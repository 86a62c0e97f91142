from fastapi import APIRouter, Depends

from app.deps import CurrentUser, get_current_user
from app.errors import NotFound
from app.schemas import CountResponse, IdInput, NotificationResponse
from app.services.notification import notification_service

router = APIRouter(prefix="/rpc", tags=["notification"])


@router.get("/notification.getRecent", response_model=list[NotificationResponse])
async def get_recent(
    current_user: CurrentUser = Depends(get_current_user),
) -> list[NotificationResponse]:
    return await notification_service.get_recent(current_user.id)


@router.get("/notification.getUnreadCount", response_model=CountResponse)
async def get_unread_count(
    current_user: CurrentUser = Depends(get_current_user),
) -> CountResponse:
    return CountResponse(count=await notification_service.unread_count(current_user.id))


@router.post("/notification.markRead", response_model=NotificationResponse)
async def mark_read(
    payload: IdInput,
    current_user: CurrentUser = Depends(get_current_user),
) -> NotificationResponse:
    # Someone else's notification is reported as missing
    notification = await notification_service.mark_read(payload.id, current_user.id)
    if notification is None:
        raise NotFound("Notification not found")
    return notification


@router.post("/notification.markAllRead", response_model=CountResponse)
async def mark_all_read(
    current_user: CurrentUser = Depends(get_current_user),
) -> CountResponse:
    count = await notification_service.mark_all_read(current_user.id)
    return CountResponse(count=count)
