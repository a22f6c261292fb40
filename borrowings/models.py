from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from books.models import Book


def prebooking_ttl():
    return timedelta(hours=settings.PREBOOKING_TTL_HOURS)


class LoanQuerySet(models.QuerySet):
    def open(self):
        return self.filter(return_date__isnull=True)

    def closed(self):
        return self.filter(return_date__isnull=False)

    def overdue(self, now=None):
        return self.open().filter(due_date__lt=now or timezone.now())


class Loan(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="loans"
    )
    book = models.ForeignKey(Book, on_delete=models.PROTECT, related_name="loans")
    created_at = models.DateTimeField(default=timezone.now)
    due_date = models.DateTimeField()
    return_date = models.DateTimeField(null=True, blank=True)
    fine = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    # Book price at the moment of borrowing.
    price = models.DecimalField(max_digits=8, decimal_places=2)
    notified = models.BooleanField(default=False)

    objects = LoanQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "book"],
                condition=models.Q(return_date__isnull=True),
                name="unique_open_loan_per_user_book",
            ),
            models.CheckConstraint(
                condition=models.Q(due_date__gt=models.F("created_at")),
                name="due_date_after_created_at",
            ),
            models.CheckConstraint(
                condition=models.Q(return_date__isnull=True)
                | models.Q(return_date__gte=models.F("created_at")),
                name="return_date_after_created_at",
            ),
        ]

    def __str__(self):
        return f"{self.user_name} borrowed {self.book.title} on {self.created_at:%Y-%m-%d}, id = {self.id}"

    @property
    def user_name(self):
        return self.user.name

    @property
    def user_email(self):
        return self.user.email

    @property
    def is_returned(self):
        return self.return_date is not None

    def is_overdue(self, now=None):
        if self.return_date is not None:
            return self.return_date > self.due_date
        return (now or timezone.now()) > self.due_date

    @property
    def total_charges(self):
        """Book price plus any fine, as charged on return."""
        return (self.price + (self.fine or Decimal("0.00"))).quantize(Decimal("0.01"))


class PrebookingQuerySet(models.QuerySet):
    def active(self, now=None):
        return self.filter(created_at__gt=(now or timezone.now()) - prebooking_ttl())

    def expired(self, now=None):
        return self.filter(created_at__lte=(now or timezone.now()) - prebooking_ttl())


class Prebooking(models.Model):
    book = models.ForeignKey(Book, on_delete=models.CASCADE, related_name="prebookings")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="prebookings"
    )
    created_at = models.DateTimeField(default=timezone.now)

    objects = PrebookingQuerySet.as_manager()

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["book", "user"], name="unique_prebooking_per_book_user"
            ),
        ]

    def __str__(self):
        return f"{self.user.email} reserved {self.book.title} at {self.created_at:%Y-%m-%d %H:%M}"

    @property
    def expires_at(self):
        return self.created_at + prebooking_ttl()

    def is_active(self, now=None):
        return (now or timezone.now()) < self.expires_at
