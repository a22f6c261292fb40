from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from borrowings.models import Loan, Prebooking

pytestmark = pytest.mark.django_db


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out)
    return out.getvalue()


def test_purge_reports_deleted_rows(verified_reader, reader, book):
    Prebooking.objects.create(book=book, user=verified_reader)
    stale = Prebooking.objects.create(book=book, user=reader)
    Prebooking.objects.filter(pk=stale.pk).update(
        created_at=timezone.now() - timedelta(hours=25)
    )

    assert "Purged 1 expired prebooking(s)." in run("purge_expired_prebookings")
    assert "No expired prebookings found." in run("purge_expired_prebookings")
    assert Prebooking.objects.count() == 1


def test_overdue_notice_for_one_loan(reader, book):
    now = timezone.now()
    loan = Loan.objects.create(
        user=reader,
        book=book,
        created_at=now - timedelta(days=8),
        due_date=now - timedelta(hours=23, minutes=30),
        price=book.price,
    )

    assert "Notice sent, current fine Nrs. 2.40" in run("send_overdue_notification", str(loan.id))
    assert "Skipped: Already notified" in run("send_overdue_notification", str(loan.id))
