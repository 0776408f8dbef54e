"""
Celery tasks.

Only the post-registration welcome notification lives here. Actual message
delivery (email, push) is handled outside this service; the task records the
event so a delivery integration can hook in.
"""
import logging

from app.core.celery_app import celery_app
from app.core.config import get_settings

logger = logging.getLogger(__name__)


@celery_app.task(
    bind=True,
    name="app.services.tasks.send_welcome_notification",
    queue="notifications",
    max_retries=3,
)
def send_welcome_notification(self, user_id: str) -> dict:
    """
    Announce a newly registered user.

    Args:
        user_id: Login identifier of the new user

    Returns:
        Summary dict (ignored by callers)
    """
    settings = get_settings()
    logger.info(f"Welcome to {settings.app_name}, '{user_id}'")
    return {"user_id": user_id, "notified": True}


def dispatch_welcome_notification(user_id: str) -> None:
    """Enqueue the welcome notification, best effort.

    Runs after the registration response has been produced. A broker outage
    is logged and dropped so it can never undo or fail a registration.
    """
    if not get_settings().welcome_notifications_enabled:
        logger.debug(f"Welcome notifications disabled; skipping '{user_id}'")
        return
    try:
        send_welcome_notification.delay(user_id)
    except Exception:
        logger.exception(f"Failed to enqueue welcome notification for '{user_id}'")
