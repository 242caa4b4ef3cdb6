"""
Celery application configuration and beat schedule.

Used when ``SCHEDULER_BACKEND=celery``; the embedded scheduler is the
default.
"""

from celery import Celery
from celery.schedules import crontab

from jobinsight.config.settings import settings

celery_app = Celery(
    "jobinsight",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["jobinsight.background.tasks.precompute_metrics"],
)

celery_app.conf.update(
    task_routes={
        "precompute_daily_metrics_task": {"queue": "metrics"},
        "precompute_weekly_metrics_task": {"queue": "metrics"},
    },
    # Worker configuration
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    worker_hijack_root_logger=False,
    # Task configuration
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    result_expires=3600,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    # Crontab fields are read in the reporting timezone
    timezone=settings.REPORTING_TIMEZONE,
    enable_utc=True,
    beat_schedule={
        "precompute-daily-metrics": {
            "task": "precompute_daily_metrics_task",
            "schedule": crontab(
                minute=settings.PRECOMPUTE_DAILY_MINUTE,
                hour=settings.PRECOMPUTE_DAILY_HOUR,
            ),
            "options": {"queue": "metrics"},
        },
        "precompute-weekly-metrics": {
            "task": "precompute_weekly_metrics_task",
            # Celery counts weekdays from Sunday = 0
            "schedule": crontab(
                minute=settings.PRECOMPUTE_WEEKLY_MINUTE,
                hour=settings.PRECOMPUTE_WEEKLY_HOUR,
                day_of_week=(settings.PRECOMPUTE_WEEKLY_WEEKDAY + 1) % 7,
            ),
            "options": {"queue": "metrics"},
        },
    },
)

if __name__ == "__main__":
    celery_app.start()
