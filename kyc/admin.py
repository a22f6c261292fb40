from django.contrib import admin

from kyc.models import KycSubmission


@admin.register(KycSubmission)
class KycSubmissionAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "document_type", "status", "updated_at"]
    list_filter = ["status", "document_type"]
    search_fields = ["user__email", "first_name", "last_name", "phone"]
    readonly_fields = ["created_at", "updated_at"]
