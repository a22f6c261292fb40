from django.contrib import admin

from books.models import Book


@admin.register(Book)
class BookAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "author", "price", "quantity", "total_copies", "borrow_count"]
    search_fields = ["title", "author"]
    # Stock counters belong to the lending ledger.
    readonly_fields = ["quantity", "total_copies", "borrow_count", "created_at", "updated_at"]
