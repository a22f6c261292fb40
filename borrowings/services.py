"""
Lending ledger operations.

Every operation runs in a single transaction that starts by locking the
book's row, so all changes to one book are serialized while different books
proceed in parallel. After each commit:

* ``book.quantity == book.total_copies - open loans of the book``
* ``active prebookings of the book <= book.quantity``
"""

import functools
import logging
from contextlib import contextmanager
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import OperationalError, connection, transaction
from django.utils import timezone

from books.models import Book
from borrowings.exceptions import (
    Conflict,
    Forbidden,
    NotFound,
    ServiceBusy,
    ValidationError,
)
from borrowings.fines import calculate_fine
from borrowings.models import Loan, Prebooking
from notifications.services import notify_book_available
from notifications.telegram import (
    TIMESTAMP_FORMAT,
    local_time,
    loan_alert,
    post_staff_alert,
)

logger = logging.getLogger(__name__)


def ledger_operation(func):
    """Turn lock timeouts and serialization failures into a retryable error."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OperationalError as exc:
            logger.warning(f"{func.__name__} rolled back: {exc}")
            raise ServiceBusy() from exc

    return wrapper


def _set_lock_timeout():
    if connection.vendor == "postgresql":
        with connection.cursor() as cursor:
            cursor.execute(
                "SELECT set_config('lock_timeout', %s, true)",
                [f"{settings.LEDGER_LOCK_TIMEOUT_MS}ms"],
            )


@contextmanager
def locked_book(book_id):
    """Open a transaction holding the row lock of ``book_id``."""
    with transaction.atomic():
        _set_lock_timeout()
        try:
            book = Book.objects.select_for_update().get(pk=book_id)
        except (Book.DoesNotExist, ValueError, TypeError):
            raise NotFound("Book not found.")
        yield book


def _has_open_loan(user, book):
    return Loan.objects.open().filter(user=user, book=book).exists()


@ledger_operation
def record_borrow(book_id, email, now=None):
    """Lend one copy of ``book_id`` to the verified user owning ``email``."""
    if not email or not str(email).strip():
        raise ValidationError("Please provide the borrower's email.")
    now = now or timezone.now()

    with locked_book(book_id) as book:
        user = (
            get_user_model()
            .objects.filter(email__iexact=str(email).strip(), account_verified=True)
            .first()
        )
        if user is None:
            raise NotFound("User not found.")

        if _has_open_loan(user, book):
            raise Conflict("Book already borrowed.")

        if book.quantity <= 0:
            raise Conflict("Book not available.")

        reservations = Prebooking.objects.active(now).filter(book=book)
        holds_reservation = reservations.filter(user=user).exists()
        if not holds_reservation and reservations.count() >= book.quantity:
            raise Conflict("All available copies are reserved.")

        if not book.take_copy():
            raise Conflict("Book not available.")

        loan = Loan.objects.create(
            user=user,
            book=book,
            created_at=now,
            due_date=now + timedelta(days=settings.LOAN_PERIOD_DAYS),
            price=book.price,
        )

        # The reservation, if any, is fulfilled by this loan.
        Prebooking.objects.filter(book=book, user=user).delete()

        message = loan_alert(
            "📚 New Loan",
            loan,
            ("🗓️ Due", f"{local_time(loan.due_date):{TIMESTAMP_FORMAT}}"),
            ("📦 Copies left", book.quantity),
        )
        transaction.on_commit(lambda: post_staff_alert(message))

    logger.info(
        f"Loan {loan.id}: book {book.id} lent to user {user.id}, {book.quantity} left"
    )
    return loan


@ledger_operation
def return_loan(loan_id, actor, email=None, now=None):
    """
    Close loan ``loan_id`` on behalf of ``actor``.

    Only the borrower or staff may return a loan. ``email``, when given, must
    name the borrower. Returns the closed loan and the total charged (book
    price plus fine).
    """
    now = now or timezone.now()

    try:
        book_id = Loan.objects.filter(pk=loan_id).values_list("book_id", flat=True).first()
    except (ValueError, TypeError):
        book_id = None
    if book_id is None:
        raise NotFound("Borrow record not found.")

    with locked_book(book_id) as book:
        loan = Loan.objects.select_for_update().select_related("user").get(pk=loan_id)

        if not (actor.is_staff or loan.user_id == actor.pk):
            raise Forbidden("You are not allowed to return this book.")

        if email and loan.user.email.lower() != str(email).strip().lower():
            raise Forbidden("User email mismatch.")

        if loan.return_date is not None:
            raise Conflict("Book already returned.")

        loan.fine = calculate_fine(loan.due_date, now)
        loan.return_date = now
        loan.save(update_fields=["fine", "return_date"])

        if not book.put_back_copy():
            # Every copy is already on the shelf, so this loan was never counted.
            raise Conflict("Book stock does not match its open loans.")

        active = Prebooking.objects.active(now).filter(book=book).count()
        notify_book_available(book, active)

        total = loan.total_charges
        if loan.fine:
            message = loan_alert(
                "💸 Late Return",
                loan,
                ("🗓️ Was due", f"{local_time(loan.due_date):{TIMESTAMP_FORMAT}}"),
                ("💰 Fine", f"Nrs. {loan.fine}"),
            )
            transaction.on_commit(lambda: post_staff_alert(message))

    logger.info(f"Loan {loan.id}: returned with fine {loan.fine}, total {total}")
    return loan, total


@ledger_operation
def prebook(book_id, user, now=None):
    """Reserve a shelf copy of ``book_id`` for a KYC verified ``user``."""
    now = now or timezone.now()

    if not user.is_kyc_verified:
        raise Forbidden("You must complete and verify your KYC to pre-book books.")

    with locked_book(book_id) as book:
        if _has_open_loan(user, book):
            raise Conflict(
                "You have already borrowed this book and cannot pre-book it again."
            )

        if book.quantity <= 0:
            raise Conflict("This book is out of stock and cannot be pre-booked.")

        reservations = Prebooking.objects.filter(book=book)
        if reservations.active(now).filter(user=user).exists():
            raise Conflict("You have already pre-booked this book.")

        if reservations.active(now).count() >= book.quantity:
            raise Conflict("This book is fully reserved.")

        # A lapsed reservation not yet purged would trip the unique constraint.
        reservations.expired(now).filter(user=user).delete()

        prebooking = Prebooking.objects.create(book=book, user=user, created_at=now)

    logger.info(f"Prebooking {prebooking.id}: book {book.id} reserved for user {user.id}")
    return prebooking


@ledger_operation
def adjust_inventory(book_id, delta, now=None):
    """Add (+1) or remove (-1) an owned copy of ``book_id``."""
    if delta not in (1, -1):
        raise ValidationError("Inventory can only change by one copy at a time.")
    now = now or timezone.now()

    with locked_book(book_id) as book:
        new_quantity = book.quantity + delta
        if new_quantity < 0:
            raise Conflict("Book quantity cannot be negative.")

        if delta < 0:
            reserved = Prebooking.objects.active(now).filter(book=book).count()
            if reserved > new_quantity:
                raise Conflict("Cannot remove a copy reserved by a pre-booking.")

        if not book.adjust_copies(delta):
            raise Conflict("Book quantity cannot be negative.")

    logger.info(
        f"Book {book.id}: inventory {delta:+d}, now {book.quantity}/{book.total_copies}"
    )
    return book


def purge_expired_prebookings(now=None):
    """Delete reservations past their time-to-live. Returns the number removed."""
    deleted, _ = Prebooking.objects.expired(now).delete()
    return deleted
