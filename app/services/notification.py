from uuid import UUID

from app.models import Notification
from app.schemas import NotificationResponse

RECENT_LIMIT = 10


class NotificationService:
    async def notify(
        self, user_id: UUID, title: str, message: str | None = None
    ) -> None:
        await Notification.create(user_id=user_id, title=title, message=message)

    async def get_recent(self, user_id: UUID) -> list[NotificationResponse]:
        """The caller's newest notifications, newest first."""
        notifications = (
            await Notification.filter(user_id=user_id)
            .order_by("-created_at")
            .limit(RECENT_LIMIT)
        )
        return [NotificationResponse.model_validate(n) for n in notifications]

    async def mark_read(
        self, notification_id: UUID, user_id: UUID
    ) -> NotificationResponse | None:
        """None when the notification does not exist or belongs to someone else."""
        inst = await Notification.get_or_none(id=notification_id, user_id=user_id)
        if inst is None:
            return None
        if not inst.is_read:
            inst.is_read = True
            await inst.save(update_fields=["is_read"])
        return NotificationResponse.model_validate(inst)

    async def mark_all_read(self, user_id: UUID) -> int:
        return await Notification.filter(user_id=user_id, is_read=False).update(
            is_read=True
        )

    async def unread_count(self, user_id: UUID) -> int:
        return await Notification.filter(user_id=user_id, is_read=False).count()


notification_service = NotificationService()
