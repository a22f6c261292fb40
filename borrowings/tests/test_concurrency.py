import threading

import pytest
from django.db import connections

from borrowings import services
from borrowings.exceptions import Conflict
from borrowings.models import Loan

# Threads need their own connections to a committed, file backed database:
# row locks on PostgreSQL, IMMEDIATE transactions on SQLite.
pytestmark = pytest.mark.django_db(transaction=True)

BORROWERS = 8


def test_parallel_borrows_of_last_copy(make_book, make_user, assert_ledger_consistent):
    book = make_book(quantity=1)
    emails = [make_user().email for _ in range(BORROWERS)]
    barrier = threading.Barrier(BORROWERS)
    outcomes = []
    lock = threading.Lock()

    def borrow(email):
        barrier.wait()
        result = "error"
        try:
            services.record_borrow(book.id, email)
            result = "ok"
        except Conflict:
            result = "conflict"
        finally:
            connections.close_all()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=borrow, args=(email,)) for email in emails]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == BORROWERS - 1
    book.refresh_from_db()
    assert book.quantity == 0
    assert Loan.objects.open().filter(book=book).count() == 1
    assert_ledger_consistent(book)
