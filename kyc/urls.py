from django.urls import path

from kyc.views import all_submissions, kyc_status, review_submission, submit_kyc

app_name = "kyc"

urlpatterns = [
    path("submit/", submit_kyc, name="submit"),
    path("status/", kyc_status, name="status"),
    path("admin/all/", all_submissions, name="admin_all"),
    path("admin/update/<int:pk>/", review_submission, name="admin_update"),
]
