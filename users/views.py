import logging

from django.contrib.auth import get_user_model
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from users.serializers import UserSerializer

logger = logging.getLogger(__name__)


class RegisterView(generics.CreateAPIView):
    """Open sign-up. New accounts start unverified with no KYC on file."""

    serializer_class = UserSerializer
    authentication_classes = ()
    permission_classes = (AllowAny,)

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info(f"Registered user {user.id} <{user.email}>")


class MyAccountView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    permission_classes = (IsAuthenticated,)

    def get_object(self):
        return self.request.user


class AllUsersView(generics.ListAPIView):
    serializer_class = UserSerializer
    permission_classes = (IsAdminUser,)
    pagination_class = None

    def get_queryset(self):
        return get_user_model().objects.order_by("-date_joined")

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"success": True, "users": serializer.data})


class RegisterAdminView(generics.CreateAPIView):
    """Staff create other staff accounts, verified from the start."""

    serializer_class = UserSerializer
    permission_classes = (IsAdminUser,)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        admin = serializer.save(is_staff=True, account_verified=True)

        logger.info(f"Admin {admin.id} <{admin.email}> added by user {request.user.id}")
        return Response(
            {
                "success": True,
                "message": "Admin registered successfully.",
                "user": self.get_serializer(admin).data,
            },
            status=status.HTTP_201_CREATED,
        )


class UserDetailsView(generics.RetrieveAPIView):
    serializer_class = UserSerializer
    permission_classes = (IsAdminUser,)

    def get_object(self):
        user = get_user_model().objects.filter(pk=self.kwargs["pk"]).first()
        if user is None:
            raise NotFound("User not found.")
        return user

    def retrieve(self, request, *args, **kwargs):
        return Response({"success": True, "user": self.get_serializer(self.get_object()).data})
