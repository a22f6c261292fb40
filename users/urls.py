from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from users.views import (
    AllUsersView,
    MyAccountView,
    RegisterAdminView,
    RegisterView,
    UserDetailsView,
)

app_name = "users"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("me/", MyAccountView.as_view(), name="manage"),
    path("token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("all/", AllUsersView.as_view(), name="all"),
    path("add/new-admin/", RegisterAdminView.as_view(), name="add_admin"),
    path("details/<int:pk>/", UserDetailsView.as_view(), name="details"),
]
