from rest_framework import serializers

from books.serializers import BookSerializer
from borrowings.models import Loan, Prebooking
from users.serializers import UserSummarySerializer


class LoanDetailSerializer(serializers.ModelSerializer):
    """Detailed read serializer for a Loan with full book information"""

    book = BookSerializer(read_only=True)
    user = UserSummarySerializer(read_only=True)
    is_returned = serializers.BooleanField(read_only=True)
    is_overdue = serializers.SerializerMethodField()
    total_charges = serializers.DecimalField(max_digits=9, decimal_places=2, read_only=True)

    class Meta:
        model = Loan
        fields = [
            "id",
            "user",
            "book",
            "created_at",
            "due_date",
            "return_date",
            "price",
            "fine",
            "total_charges",
            "is_returned",
            "is_overdue",
            "notified",
        ]

    def get_is_overdue(self, obj):
        return obj.is_overdue()


class LoanListSerializer(serializers.ModelSerializer):
    """Simplified serializer for listing loans"""

    book_title = serializers.CharField(source="book.title", read_only=True)
    user_name = serializers.CharField(read_only=True)
    user_email = serializers.CharField(read_only=True)
    is_returned = serializers.BooleanField(read_only=True)

    class Meta:
        model = Loan
        fields = [
            "id",
            "book",
            "book_title",
            "user_name",
            "user_email",
            "created_at",
            "due_date",
            "return_date",
            "fine",
            "is_returned",
        ]


class BorrowedBookSerializer(serializers.ModelSerializer):
    """A user's own view of one loan, in the shape the web client expects."""

    book_id = serializers.IntegerField(source="book.id", read_only=True)
    book_title = serializers.CharField(source="book.title", read_only=True)
    returned = serializers.BooleanField(source="is_returned", read_only=True)
    borrowed_date = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Loan
        fields = ["id", "book_id", "book_title", "returned", "borrowed_date", "due_date"]


class PrebookingSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    book_title = serializers.CharField(source="book.title", read_only=True)
    expires_at = serializers.DateTimeField(read_only=True)

    class Meta:
        model = Prebooking
        fields = ["id", "book", "book_title", "user", "created_at", "expires_at"]
