"""Notification persistence and dispatch."""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.models.base import utcnow
from motivatr.models.notification import (
    Notification,
    NotificationChannel,
    NotificationStatus,
    NotificationType,
)
from motivatr.services import email_service

logger = logging.getLogger(__name__)


async def send_and_log(
    db: AsyncSession,
    recipient_email: str,
    subject: str,
    message_text: str,
    notification_type: NotificationType,
    task_id: Optional[str] = None,
    channel: NotificationChannel = NotificationChannel.email,
) -> Notification:
    notification = Notification(
        recipient_email=recipient_email,
        task_id=task_id,
        channel=channel,
        notification_type=notification_type,
        subject=subject,
        message_text=message_text,
        status=NotificationStatus.pending,
    )
    db.add(notification)
    await db.flush()

    try:
        ok = await email_service.send_email(recipient_email, subject, message_text)
        notification.status = NotificationStatus.sent if ok else NotificationStatus.failed
        if ok:
            notification.sent_at = utcnow()
        else:
            notification.error_message = "email channel not configured"
    except Exception as exc:
        logger.error("Notification dispatch failed (%s): %s", recipient_email, exc)
        notification.status = NotificationStatus.failed
        notification.error_message = str(exc)[:500]

    await db.flush()
    return notification
