from django.contrib import admin

from borrowings.models import Loan, Prebooking


class LedgerRecordAdmin(admin.ModelAdmin):
    """
    Loans and prebookings move stock, so they are only created and removed
    through the lending ledger. The admin can inspect them and edit the
    fields that do not touch inventory.
    """

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Loan)
class LoanAdmin(LedgerRecordAdmin):
    list_display = [
        "id",
        "book",
        "borrower_email",
        "created_at",
        "due_date",
        "return_date",
        "fine",
        "notified",
    ]
    list_filter = ["return_date", "notified"]
    search_fields = ["user__email", "book__title", "book__author"]
    readonly_fields = [
        "user",
        "book",
        "created_at",
        "due_date",
        "price",
        "fine",
        "return_date",
    ]

    def borrower_email(self, obj):
        return obj.user.email

    borrower_email.short_description = "Borrower Email"


@admin.register(Prebooking)
class PrebookingAdmin(LedgerRecordAdmin):
    list_display = ["id", "book", "user", "created_at"]
    search_fields = ["user__email", "book__title"]
    readonly_fields = ["book", "user", "created_at"]
