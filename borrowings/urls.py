from django.urls import include, path
from rest_framework import routers

from borrowings.views import (
    AdminPrebookingListView,
    LoanViewSet,
    MyBorrowedBooksView,
    PrebookingQueueView,
    PrebookView,
    RecordBorrowView,
    ReturnBorrowView,
)

router = routers.DefaultRouter()
router.register("loans", LoanViewSet, basename="loans")

borrow_urlpatterns = [
    path(
        "record-borrow-book/<int:book_id>/",
        RecordBorrowView.as_view(),
        name="record_borrow_book",
    ),
    path(
        "return-borrowed-book/<int:loan_id>/",
        ReturnBorrowView.as_view(),
        name="return_borrowed_book",
    ),
    path("my-borrowed-books/", MyBorrowedBooksView.as_view(), name="my_borrowed_books"),
    path("", include(router.urls)),
]

prebook_urlpatterns = [
    path("admin/all/", AdminPrebookingListView.as_view(), name="admin_prebookings"),
    path("users/<int:book_id>/", PrebookingQueueView.as_view(), name="prebooking_queue"),
    path("<int:book_id>/", PrebookView.as_view(), name="prebook"),
]
