from django.contrib.auth import get_user_model
from rest_framework import serializers


class UserSerializer(serializers.ModelSerializer):
    role = serializers.CharField(read_only=True)

    class Meta:
        model = get_user_model()
        fields = [
            "id",
            "email",
            "name",
            "password",
            "role",
            "account_verified",
            "kyc_status",
        ]
        read_only_fields = ["id", "role", "account_verified", "kyc_status"]
        extra_kwargs = {"password": {"write_only": True, "min_length": 8}}

    def validate_email(self, value):
        return value.strip().lower()

    def create(self, validated_data):
        return get_user_model().objects.create_user(**validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save()
        return user


class UserSummarySerializer(serializers.ModelSerializer):
    """Name and email only, for queues and admin listings."""

    class Meta:
        model = get_user_model()
        fields = ["id", "name", "email"]
