from rest_framework import serializers

from kyc.models import KycSubmission
from users.serializers import UserSummarySerializer


class KycSubmissionSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = KycSubmission
        fields = [
            "id",
            "user",
            "first_name",
            "middle_name",
            "last_name",
            "phone",
            "document_type",
            "document_url",
            "status",
            "rejection_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["status", "rejection_reason", "created_at", "updated_at"]


class KycReviewSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[KycSubmission.Status.VERIFIED, KycSubmission.Status.REJECTED],
        error_messages={"invalid_choice": "Invalid status provided."},
    )
    rejection_reason = serializers.CharField(required=False, allow_blank=True)
