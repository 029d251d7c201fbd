from celery import Celery
from celery.schedules import crontab

from app.config import get_settings

settings = get_settings()

celery_app = Celery(
    "harvest_assistant",
    broker=settings.broker_url,
    backend=settings.broker_url,
    include=[
        "app.tasks.metrics_task",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
)

# Periodic tasks (beat). Requires worker with -B or separate beat service.
celery_app.conf.beat_schedule = {
    "compute-daily-intelligence-metrics": {
        "task": "app.tasks.metrics_task.compute_daily_metrics_task",
        "schedule": crontab(hour=settings.metrics_rollup_hour, minute=5),
    },
}
