from rest_framework import serializers

from books.models import Book


class BookSerializer(serializers.ModelSerializer):
    is_available = serializers.BooleanField(read_only=True)

    class Meta:
        model = Book
        fields = [
            "id",
            "title",
            "author",
            "description",
            "price",
            "quantity",
            "total_copies",
            "is_available",
            "borrow_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["total_copies", "borrow_count", "created_at", "updated_at"]

    def validate_quantity(self, value):
        # Stock only moves through the ledger once a book exists.
        if self.instance is not None and value != self.instance.quantity:
            raise serializers.ValidationError(
                "Use the increment/decrement endpoints to change the quantity."
            )
        return value

    def create(self, validated_data):
        validated_data["total_copies"] = validated_data.get("quantity", 0)
        return super().create(validated_data)
