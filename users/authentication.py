from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that accepts the token from either place the web client
    may send it:

        Authorization: Bearer <access_token>
        Cookie: token=<access_token>

    The header wins when both are present.
    """

    def authenticate(self, request):
        if self.get_header(request) is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token.strip())
        return self.get_user(validated_token), validated_token
