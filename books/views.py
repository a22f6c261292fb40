import logging

from django.db.models import Q
from rest_framework import status, viewsets
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from books.models import Book
from books.permissions import IsLibrarianOrReadOnly
from books.serializers import BookSerializer
from borrowings import services
from borrowings.exceptions import Conflict, NotFound

logger = logging.getLogger(__name__)


class BookViewSet(viewsets.ModelViewSet):
    serializer_class = BookSerializer
    permission_classes = [IsLibrarianOrReadOnly]

    def get_queryset(self):
        queryset = Book.objects.all()

        keyword = self.request.query_params.get("keyword", "").strip()
        if keyword:
            queryset = queryset.filter(
                Q(title__icontains=keyword) | Q(author__icontains=keyword)
            )

        return queryset

    def destroy(self, request, *args, **kwargs):
        book = self.get_object()

        # Loans are permanent records, so a lent book can never disappear.
        if book.loans.exists():
            raise Conflict("Cannot delete a book with loan history.")

        book.delete()
        logger.info(f"Book {kwargs.get('pk')} deleted by user {request.user.id}")
        return Response(
            {"success": True, "message": "Book deleted successfully."},
            status=status.HTTP_200_OK,
        )


class AdjustInventoryView(APIView):
    permission_classes = [IsAdminUser]
    delta = 0

    def put(self, request, pk):
        book = services.adjust_inventory(pk, self.delta)
        return Response(
            {
                "success": True,
                "message": "Book quantity updated successfully.",
                "book": BookSerializer(book).data,
            }
        )


class IncrementBookView(AdjustInventoryView):
    delta = 1


class DecrementBookView(AdjustInventoryView):
    delta = -1


class NotifyMeView(APIView):
    """Subscribe the current user to a restock notice for an empty book."""

    permission_classes = [IsAuthenticated]

    def post(self, request, book_id):
        book = Book.objects.filter(pk=book_id).first()
        if book is None:
            raise NotFound("Book not found.")

        if book.quantity > 0:
            raise Conflict("Book is already available.")

        book.subscribers.add(request.user)
        return Response(
            {
                "success": True,
                "message": "You will be notified when this book is back in stock.",
            }
        )
