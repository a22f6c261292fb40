from decimal import Decimal

from django.conf import settings
from django.utils import timezone

MICROSECONDS_PER_HOUR = 3600 * 1_000_000


def hours_late(due_date, now):
    """Whole hours past due, any started hour counting as a full one."""
    delta = now - due_date
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    if micros <= 0:
        return 0
    return -(-micros // MICROSECONDS_PER_HOUR)


def calculate_fine(due_date, now=None):
    """
    Fine owed for a loan due at ``due_date`` when settled at ``now``.

    Nothing is owed up to and including the due instant. After that every
    started hour costs ``FINE_PER_HOUR``. Integer arithmetic keeps the result
    exact and non-decreasing in ``now``.
    """
    now = now or timezone.now()
    rate = Decimal(str(settings.FINE_PER_HOUR))
    return (rate * hours_late(due_date, now)).quantize(Decimal("0.01"))
