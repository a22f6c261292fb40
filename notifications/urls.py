from django.urls import path

from notifications.views import NotificationViewSet

urlpatterns = [
    path(
        "my-notifications/",
        NotificationViewSet.as_view({"get": "list"}),
        name="my_notifications",
    ),
    path(
        "<int:pk>/",
        NotificationViewSet.as_view({"delete": "destroy"}),
        name="notification_detail",
    ),
]
