import logging

from django.utils.html import escape

from notifications.models import Notification
from notifications.telegram import post_staff_alert

logger = logging.getLogger(__name__)


def notify_book_available(book, active_prebookings):
    """
    Tell restock subscribers that ``book`` has an unreserved copy again.

    Subscribers are notified once and then cleared. Returns how many users
    were notified.
    """
    if book.quantity <= active_prebookings:
        return 0

    subscriber_ids = list(book.subscribers.values_list("id", flat=True))
    if not subscriber_ids:
        return 0

    Notification.objects.bulk_create(
        [
            Notification(
                user_id=user_id,
                book=book,
                message=f'The book "{book.title}" you subscribed to is now available!',
                type=Notification.Type.AVAILABILITY,
            )
            for user_id in subscriber_ids
        ]
    )
    book.subscribers.clear()

    logger.info(
        f"Book {book.id}: notified {len(subscriber_ids)} subscriber(s) of availability"
    )
    return len(subscriber_ids)


def notify_overdue(user_id, book_id, message):
    """
    Outbound hook for the overdue sweep: store an in-app notice and copy it to
    the staff chat. Delivery to Telegram is best effort.
    """
    notification = Notification.objects.create(
        user_id=user_id,
        book_id=book_id,
        message=message,
        type=Notification.Type.OVERDUE,
    )
    post_staff_alert(f"⚠️ <b>OVERDUE</b>\n{escape(message)}")
    logger.info(f"Overdue notice {notification.id} stored for user {user_id}")
    return notification
