import logging

from celery import shared_task
from django.utils import timezone

from borrowings.fines import calculate_fine
from borrowings.models import Loan
from notifications.services import notify_overdue

logger = logging.getLogger(__name__)


@shared_task
def send_overdue_notification(loan_id):
    """
    Send the overdue notice for one loan and mark it as notified.

    This is the unit of work the overdue sweep enqueues; it can also be run by
    hand for a single loan.

    Args:
        loan_id (int): ID of the loan to notify about

    Returns:
        dict: Result of the notification attempt
    """
    try:
        loan = Loan.objects.select_related("book", "user").get(id=loan_id)
    except Loan.DoesNotExist:
        return {"loan_id": loan_id, "status": "error", "message": "Loan not found"}

    if loan.return_date is not None:
        return {"loan_id": loan_id, "status": "skipped", "reason": "Book already returned"}

    now = timezone.now()
    if loan.due_date >= now:
        return {"loan_id": loan_id, "status": "skipped", "reason": "Not overdue yet"}

    if loan.notified:
        return {"loan_id": loan_id, "status": "skipped", "reason": "Already notified"}

    fine = calculate_fine(loan.due_date, now)
    notify_overdue(
        loan.user_id,
        loan.book_id,
        f'The book "{loan.book.title}" is overdue. Current fine: Nrs. {fine}.',
    )

    Loan.objects.filter(pk=loan.pk).update(notified=True)
    logger.info(f"Loan {loan_id}: overdue notice sent to {loan.user.email}")

    return {"loan_id": loan_id, "status": "success", "fine": str(fine)}
