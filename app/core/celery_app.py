"""
Celery application configuration.

Celery carries side effects that must never hold up or fail a request, such
as the welcome notification sent after registration.

Usage:
    # Start worker (from project root):
    celery -A app.core.celery_app worker --loglevel=info -Q notifications
"""
from celery import Celery

from app.core.config import settings

# Create Celery application
celery_app = Celery(
    "user_session_auth",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["app.services.tasks"],  # Auto-discover tasks
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution
    task_acks_late=True,  # Acknowledge after task completes (safety)
    task_reject_on_worker_lost=True,
    task_ignore_result=True,  # Fire-and-forget notifications

    # Task routing
    task_routes={
        "app.services.tasks.*": {"queue": "notifications"},
    },

    # Task time limits
    task_soft_time_limit=30,
    task_time_limit=60,

    # Retry settings
    task_default_retry_delay=30,
    task_max_retries=3,

    # Publishing must not stall the API when the broker is down
    broker_connection_timeout=2,
    task_publish_retry=False,
)

# Define task queues
celery_app.conf.task_queues = {
    "notifications": {
        "exchange": "notifications",
        "routing_key": "notifications",
    },
}
