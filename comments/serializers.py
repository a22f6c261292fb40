from rest_framework import serializers

from comments.models import Comment


class CommentSerializer(serializers.ModelSerializer):
    text = serializers.CharField(
        trim_whitespace=True,
        error_messages={
            "required": "Comment text is required.",
            "blank": "Comment text is required.",
        },
    )

    class Meta:
        model = Comment
        fields = ["id", "book", "user", "author_name", "author_role", "text", "created_at"]
        read_only_fields = ["book", "user", "author_name", "author_role", "created_at"]
