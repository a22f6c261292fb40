from django.urls import include, path
from rest_framework import routers

from books.views import BookViewSet, DecrementBookView, IncrementBookView, NotifyMeView

router = routers.SimpleRouter()
router.register("", BookViewSet, basename="books")

urlpatterns = [
    path("admin/increment/<int:pk>/", IncrementBookView.as_view(), name="book_increment"),
    path("admin/decrement/<int:pk>/", DecrementBookView.as_view(), name="book_decrement"),
    path("notify-me/<int:book_id>/", NotifyMeView.as_view(), name="book_notify_me"),
    path("", include(router.urls)),
]
