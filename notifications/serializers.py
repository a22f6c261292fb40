from rest_framework import serializers

from notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    book_title = serializers.CharField(source="book.title", read_only=True, default=None)

    class Meta:
        model = Notification
        fields = ["id", "type", "message", "book", "book_title", "is_read", "created_at"]
        read_only_fields = fields
