"""Notification dispatcher - in-app notifications and best-effort email"""

import logging
from typing import Awaitable, Callable, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Notification, NotificationType, User
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    recipient_email: str,
    recipient_type: str,
    notification_type: NotificationType,
    title: str,
    message: str,
    booking_id: Optional[str] = None,
) -> Notification:
    """
    Persist an unread notification for a recipient.

    The row joins the caller's unit of work; it is committed together with
    the lifecycle change that triggered it.
    """
    notification = NotificationRepository.add_notification(
        db,
        recipient_email=recipient_email,
        recipient_type=recipient_type,
        type=notification_type.value,
        title=title,
        message=message,
        booking_id=booking_id,
    )
    logger.info(
        f"Queued {notification_type.value} notification for {recipient_type} {recipient_email}"
    )
    return notification


async def send_email_best_effort(
    description: str, email_func: Callable[..., Awaitable[dict]], **email_kwargs
) -> bool:
    """
    Send an email without letting failures reach the caller.

    Returns True when the provider accepted the message.
    """
    try:
        await email_func(**email_kwargs)
        logger.info(f"{description} email sent to {email_kwargs.get('to')}")
        return True
    except Exception as e:
        logger.error(f"Failed to send {description} email to {email_kwargs.get('to')}: {e}")
        return False


class NotificationService:
    """Service layer for reading and acknowledging notifications"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def get_notifications(
        self, user: User, unread_only: bool = False, limit: int = 50, offset: int = 0
    ) -> dict:
        notifications = self.repo.get_notifications(
            self.db, user.email, unread_only=unread_only, limit=limit, offset=offset
        )
        return {
            "notifications": notifications,
            "total": self.repo.count_notifications(self.db, user.email),
            "unread_count": self.repo.count_unread(self.db, user.email),
        }

    def get_unread_count(self, user: User) -> int:
        return self.repo.count_unread(self.db, user.email)

    def get_notification(self, notification_id: str, user: User) -> Notification:
        notification = self.repo.get_notification(self.db, notification_id, user.email)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        return notification

    def mark_read(self, notification_id: str, user: User) -> Notification:
        notification = self.get_notification(notification_id, user)
        notification.is_read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_read(self, user: User) -> dict:
        updated = self.repo.mark_all_read(self.db, user.email)
        self.db.commit()
        logger.info(f"Marked {updated} notifications read for {user.email}")
        return {"message": "All notifications marked as read", "updated": updated}

    def delete_notification(self, notification_id: str, user: User) -> None:
        notification = self.get_notification(notification_id, user)
        self.db.delete(notification)
        self.db.commit()
