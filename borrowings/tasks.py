import logging

from celery import shared_task

from borrowings import services

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def purge_expired_prebookings(self):
    """
    Delete prebookings older than their time-to-live.

    Reads already ignore expired rows, so this only reclaims storage and keeps
    the admin tables short. Runs from Celery beat.
    """
    try:
        deleted = services.purge_expired_prebookings()
    except Exception as exc:
        logger.error(f"Task {self.request.id}: prebooking purge failed: {exc}")
        raise self.retry(exc=exc)

    logger.info(f"Task {self.request.id}: purged {deleted} expired prebooking(s)")
    return {"task_id": self.request.id, "status": "success", "deleted": deleted}
