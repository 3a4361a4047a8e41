"""Notification repository - Database operations for in-app notifications"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Notification


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def add_notification(db: Session, **notification_data) -> Notification:
        """Stage a notification in the current unit of work"""
        notification = Notification(is_read=False, **notification_data)
        db.add(notification)
        db.flush()
        return notification

    @staticmethod
    def get_notifications(
        db: Session,
        recipient_email: str,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        query = db.query(Notification).filter(Notification.recipient_email == recipient_email)

        if unread_only:
            query = query.filter(Notification.is_read.is_(False))

        return (
            query.order_by(Notification.created_at.desc(), Notification.id)
            .offset(offset)
            .limit(limit)
            .all()
        )

    @staticmethod
    def count_notifications(db: Session, recipient_email: str) -> int:
        return (
            db.query(func.count(Notification.id))
            .filter(Notification.recipient_email == recipient_email)
            .scalar()
        )

    @staticmethod
    def count_unread(db: Session, recipient_email: str) -> int:
        return (
            db.query(func.count(Notification.id))
            .filter(
                Notification.recipient_email == recipient_email,
                Notification.is_read.is_(False),
            )
            .scalar()
        )

    @staticmethod
    def get_notification(
        db: Session, notification_id: str, recipient_email: str
    ) -> Optional[Notification]:
        return (
            db.query(Notification)
            .filter(
                Notification.id == notification_id,
                Notification.recipient_email == recipient_email,
            )
            .first()
        )

    @staticmethod
    def mark_all_read(db: Session, recipient_email: str) -> int:
        """Flip every unread notification for the recipient; returns rows changed"""
        return (
            db.query(Notification)
            .filter(
                Notification.recipient_email == recipient_email,
                Notification.is_read.is_(False),
            )
            .update({Notification.is_read: True}, synchronize_session=False)
        )
