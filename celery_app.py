"""Celery application configuration for background governance tasks."""

from celery import Celery

from netadmin.config import settings

celery = Celery("netadmin")

celery.conf.update(
    broker_url=settings.celery_broker_url,
    result_backend=settings.celery_result_backend,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_routes={
        "netadmin.modules.communications.tasks.*": {"queue": "communications"},
    },
    # A failed dispatch is picked up again by the next beat tick
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    result_expires=86400,  # 24 hours
    beat_schedule={
        "dispatch-scheduled-messages": {
            "task": "netadmin.modules.communications.tasks.dispatch_scheduled_messages",
            "schedule": settings.scheduled_message_poll_seconds,
        },
    },
)

celery.autodiscover_tasks(["netadmin.modules.communications"])
