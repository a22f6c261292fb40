from decimal import Decimal
from itertools import count

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

_sequence = count(1)


@pytest.fixture
def now():
    return timezone.now()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    def factory(**overrides):
        n = next(_sequence)
        fields = {
            "email": f"reader{n}@booknest.test",
            "name": f"Reader {n}",
            "password": "s3cret-pass",
            "account_verified": True,
        }
        fields.update(overrides)
        return get_user_model().objects.create_user(**fields)

    return factory


@pytest.fixture
def reader(make_user):
    return make_user(email="reader@booknest.test", name="Test Reader")


@pytest.fixture
def verified_reader(make_user):
    return make_user(
        email="verified@booknest.test",
        name="Verified Reader",
        kyc_status=get_user_model().KycStatus.VERIFIED,
    )


@pytest.fixture
def librarian(make_user):
    return make_user(email="admin@booknest.test", name="Librarian", is_staff=True)


@pytest.fixture
def make_book(db):
    def factory(quantity=2, **overrides):
        from books.models import Book

        fields = {
            "title": "The Blue Umbrella",
            "author": "Ruskin Bond",
            "description": "A short novel set in the hills.",
            "price": Decimal("250.00"),
            "quantity": quantity,
            "total_copies": quantity,
        }
        fields.update(overrides)
        return Book.objects.create(**fields)

    return factory


@pytest.fixture
def book(make_book):
    return make_book()


@pytest.fixture
def assert_ledger_consistent():
    """Check both book-level invariants of the lending ledger."""

    def check(book, now=None):
        from borrowings.models import Loan, Prebooking

        book.refresh_from_db()
        open_loans = Loan.objects.open().filter(book=book).count()
        active = Prebooking.objects.active(now).filter(book=book).count()
        assert book.quantity == book.total_copies - open_loans
        assert 0 <= book.quantity <= book.total_copies
        assert active <= book.quantity

    return check
