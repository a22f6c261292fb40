from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "type", "book", "is_read", "created_at"]
    list_filter = ["type", "is_read"]
    search_fields = ["user__email", "message"]
