from django.contrib import admin

from comments.models import Comment


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["id", "book", "author_name", "author_role", "created_at"]
    search_fields = ["book__title", "user__email", "text"]
    readonly_fields = ["book", "user", "author_name", "author_role", "created_at"]
