import logging

from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from borrowings.exceptions import Conflict, NotFound
from kyc.models import KycSubmission
from kyc.serializers import KycReviewSerializer, KycSubmissionSerializer

logger = logging.getLogger(__name__)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
@transaction.atomic
def submit_kyc(request):
    """Submit identity details, or resubmit after a rejection."""
    user = request.user
    existing = KycSubmission.objects.select_for_update().filter(user=user).first()

    if existing and not existing.can_resubmit:
        raise Conflict(
            "You have already submitted a KYC request that is pending or verified."
        )

    serializer = KycSubmissionSerializer(instance=existing, data=request.data)
    serializer.is_valid(raise_exception=True)
    serializer.save(
        user=user, status=KycSubmission.Status.PENDING, rejection_reason=""
    )

    user.kyc_status = user.KycStatus.PENDING
    user.save(update_fields=["kyc_status"])

    logger.info(f"KYC submitted by user {user.id}")
    return Response(
        {
            "success": True,
            "message": "KYC details submitted successfully. Please wait for admin approval.",
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def kyc_status(request):
    submission = KycSubmission.objects.filter(user=request.user).first()
    return Response(
        {
            "success": True,
            "status": request.user.kyc_status,
            "details": KycSubmissionSerializer(submission).data if submission else None,
        }
    )


@api_view(["GET"])
@permission_classes([IsAdminUser])
def all_submissions(request):
    submissions = KycSubmission.objects.select_related("user")
    return Response(
        {
            "success": True,
            "submissions": KycSubmissionSerializer(submissions, many=True).data,
        }
    )


@api_view(["PUT"])
@permission_classes([IsAdminUser])
@transaction.atomic
def review_submission(request, pk):
    serializer = KycReviewSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    new_status = serializer.validated_data["status"]

    submission = (
        KycSubmission.objects.select_for_update().select_related("user").filter(pk=pk).first()
    )
    if submission is None:
        raise NotFound("KYC submission not found.")

    submission.status = new_status
    if new_status == KycSubmission.Status.REJECTED:
        submission.rejection_reason = (
            serializer.validated_data.get("rejection_reason") or "No reason provided."
        )
    else:
        submission.rejection_reason = ""
    submission.save()

    user = submission.user
    user.kyc_status = new_status
    user.save(update_fields=["kyc_status"])

    logger.info(f"KYC {submission.id} for user {user.id} marked {new_status}")
    return Response({"success": True, "message": f"User KYC has been {new_status}."})
