from django.conf import settings
from django.db import models


class KycSubmission(models.Model):
    class DocumentType(models.TextChoices):
        CITIZENSHIP = "Citizenship", "Citizenship"
        LICENSE = "License", "License"
        NATIONAL_ID = "National ID Card", "National ID Card"
        PASSPORT = "Passport", "Passport"

    class Status(models.TextChoices):
        PENDING = "Pending", "Pending"
        VERIFIED = "Verified", "Verified"
        REJECTED = "Rejected", "Rejected"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="kyc"
    )
    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20)
    document_type = models.CharField(max_length=16, choices=DocumentType.choices)
    # Uploaded by the client to object storage; only the URL lives here.
    document_url = models.URLField(max_length=500)
    status = models.CharField(
        max_length=8, choices=Status.choices, default=Status.PENDING
    )
    rejection_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        verbose_name = "KYC submission"
        verbose_name_plural = "KYC submissions"

    def __str__(self):
        return f"KYC {self.get_status_display()} for {self.user.email}"

    @property
    def can_resubmit(self):
        return self.status == self.Status.REJECTED
