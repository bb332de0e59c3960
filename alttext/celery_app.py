"""Celery application configuration."""

from celery import Celery

from alttext.config import get_settings

settings = get_settings()

app = Celery(
    "alttext",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["alttext.tasks.auto_process"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=settings.task_time_limit,
    task_soft_time_limit=settings.task_soft_time_limit,
)
