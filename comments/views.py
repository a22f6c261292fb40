import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from books.models import Book
from borrowings.exceptions import Forbidden, NotFound
from comments.models import Comment
from comments.serializers import CommentSerializer

logger = logging.getLogger(__name__)


class CommentView(APIView):
    """
    Comment threads under ``/comment/<pk>/``.

    GET and POST treat ``pk`` as a book id: anyone may read a book's thread,
    signed in users may add to it. DELETE treats ``pk`` as a comment id and
    is allowed to the author and to staff.
    """

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_book(self, pk):
        book = Book.objects.filter(pk=pk).first()
        if book is None:
            raise NotFound("Book not found.")
        return book

    def get(self, request, pk):
        comments = self.get_book(pk).comments.all()
        return Response(
            {"success": True, "comments": CommentSerializer(comments, many=True).data}
        )

    def post(self, request, pk):
        book = self.get_book(pk)
        serializer = CommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = serializer.save(book=book, user=request.user)

        logger.info(f"Comment {comment.id} added to book {book.id} by user {request.user.id}")
        return Response(
            {
                "success": True,
                "message": "Comment added successfully.",
                "comment": CommentSerializer(comment).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def delete(self, request, pk):
        comment = Comment.objects.filter(pk=pk).first()
        if comment is None:
            raise NotFound("Comment not found.")

        if not comment.can_be_deleted_by(request.user):
            raise Forbidden("You are not authorized to delete this comment.")

        comment.delete()
        logger.info(f"Comment {pk} deleted by user {request.user.id}")
        return Response({"success": True, "message": "Comment deleted."})
