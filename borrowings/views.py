from rest_framework import generics, status, viewsets
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from borrowings import services
from borrowings.models import Loan, Prebooking
from borrowings.permissions import IsBorrowerOrLibrarian
from borrowings.serializers import (
    BorrowedBookSerializer,
    LoanDetailSerializer,
    LoanListSerializer,
    PrebookingSerializer,
)
from users.serializers import UserSummarySerializer


class LoanViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, IsBorrowerOrLibrarian]

    def get_queryset(self):
        queryset = Loan.objects.select_related("book", "user")

        # Users only ever see their own loans
        if not self.request.user.is_staff:
            queryset = queryset.filter(user=self.request.user)
        else:
            user_id = self.request.query_params.get("user_id")
            if user_id:
                try:
                    queryset = queryset.filter(user_id=int(user_id))
                except (ValueError, TypeError):
                    queryset = queryset.none()

        is_active = self.request.query_params.get("is_active")
        if is_active == "true":
            queryset = queryset.open()
        elif is_active == "false":
            queryset = queryset.closed()

        return queryset.order_by("-id")

    def get_serializer_class(self):
        if self.action == "list":
            return LoanListSerializer
        return LoanDetailSerializer


class MyBorrowedBooksView(generics.ListAPIView):
    serializer_class = BorrowedBookSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return Loan.objects.filter(user=self.request.user).select_related("book")

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"success": True, "borrowed_books": serializer.data})


class RecordBorrowView(APIView):
    """Staff records that the user with ``email`` takes a copy of the book."""

    permission_classes = [IsAdminUser]

    def post(self, request, book_id):
        loan = services.record_borrow(book_id, request.data.get("email"))
        return Response(
            {
                "success": True,
                "message": "Borrowed book has been recorded successfully.",
                "loan": LoanDetailSerializer(loan).data,
            },
            status=status.HTTP_201_CREATED,
        )


class ReturnBorrowView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, loan_id):
        loan, total = services.return_loan(
            loan_id, request.user, email=request.data.get("email")
        )
        return Response(
            {
                "success": True,
                "message": f"Book returned successfully. Total charges: Nrs. {total}",
                "fine": str(loan.fine),
                "total_charges": str(total),
                "loan": LoanDetailSerializer(loan).data,
            }
        )


class PrebookView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, book_id):
        prebooking = services.prebook(book_id, request.user)
        return Response(
            {
                "success": True,
                "message": "Book pre-booked successfully! It will be reserved for 24 hours.",
                "prebooking": PrebookingSerializer(prebooking).data,
            },
            status=status.HTTP_201_CREATED,
        )


class AdminPrebookingListView(generics.ListAPIView):
    serializer_class = PrebookingSerializer
    permission_classes = [IsAdminUser]
    pagination_class = None

    def get_queryset(self):
        return Prebooking.objects.active().select_related("book", "user")

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"success": True, "prebookings": serializer.data})


class PrebookingQueueView(APIView):
    """Users waiting on one book, oldest reservation first."""

    permission_classes = [IsAdminUser]

    def get(self, request, book_id):
        queue = (
            Prebooking.objects.active()
            .filter(book_id=book_id)
            .select_related("user")
            .order_by("created_at")
        )
        users = [prebooking.user for prebooking in queue]
        return Response(
            {"success": True, "users": UserSummarySerializer(users, many=True).data}
        )
