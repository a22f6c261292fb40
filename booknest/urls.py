from django.contrib import admin
from django.urls import include, path

from borrowings.urls import borrow_urlpatterns, prebook_urlpatterns

api_v1 = [
    path("user/", include("users.urls")),
    path("book/", include("books.urls")),
    path("borrow/", include(borrow_urlpatterns)),
    path("prebook/", include(prebook_urlpatterns)),
    path("kyc/", include("kyc.urls")),
    path("notification/", include("notifications.urls")),
    path("comment/", include("comments.urls")),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/", include(api_v1)),
]
