import os
from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "booknest.settings")

app = Celery("booknest")

# Worker and beat both read CELERY_* keys from the Django settings.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up borrowings.tasks and notifications.tasks.
app.autodiscover_tasks()

app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    result_expires=3600 * 24,  # 1 day
)
