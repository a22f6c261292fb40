import pytest

from comments.models import Comment

pytestmark = pytest.mark.django_db


def url(pk):
    return f"/api/v1/comment/{pk}/"


def test_thread_is_public_and_newest_first(api_client, reader, book):
    older = Comment.objects.create(book=book, user=reader, text="Loved the ending.")
    newer = Comment.objects.create(book=book, user=reader, text="Second read, still great.")

    response = api_client.get(url(book.id))

    assert response.status_code == 200
    assert [c["id"] for c in response.data["comments"]] == [newer.id, older.id]
    assert response.data["comments"][0]["author_name"] == "Test Reader"


def test_member_comments_under_own_name(api_client, reader, book):
    api_client.force_authenticate(reader)

    response = api_client.post(url(book.id), {"text": "  Worth it.  "}, format="json")

    assert response.status_code == 201
    comment = Comment.objects.get(book=book)
    assert (comment.author_name, comment.author_role, comment.text) == (
        "Test Reader",
        "User",
        "Worth it.",
    )


def test_staff_comment_as_the_library(api_client, librarian, book):
    api_client.force_authenticate(librarian)

    response = api_client.post(url(book.id), {"text": "New copies arrived."}, format="json")

    assert response.data["comment"]["author_name"] == "BookNest"
    assert response.data["comment"]["author_role"] == "Admin"


def test_comment_text_is_required(api_client, reader, book):
    api_client.force_authenticate(reader)

    response = api_client.post(url(book.id), {"text": "   "}, format="json")

    assert response.status_code == 400
    assert response.data["message"] == "text: Comment text is required."


def test_anonymous_users_cannot_comment(api_client, book):
    response = api_client.post(url(book.id), {"text": "Hi"}, format="json")

    assert response.status_code == 401
    assert not Comment.objects.exists()


def test_unknown_book(api_client):
    assert api_client.get(url(4242)).status_code == 404


class TestDelete:
    def test_author_deletes_own_comment(self, api_client, reader, book):
        comment = Comment.objects.create(book=book, user=reader, text="Typo")
        api_client.force_authenticate(reader)

        response = api_client.delete(url(comment.id))

        assert response.status_code == 200
        assert not Comment.objects.exists()

    def test_staff_delete_any_comment(self, api_client, reader, librarian, book):
        comment = Comment.objects.create(book=book, user=reader, text="Spam")
        api_client.force_authenticate(librarian)

        assert api_client.delete(url(comment.id)).status_code == 200

    def test_other_members_cannot_delete(self, api_client, reader, make_user, book):
        comment = Comment.objects.create(book=book, user=reader, text="Mine")
        api_client.force_authenticate(make_user())

        response = api_client.delete(url(comment.id))

        assert response.status_code == 403
        assert response.data["message"] == "You are not authorized to delete this comment."
        assert Comment.objects.filter(pk=comment.pk).exists()

    def test_missing_comment(self, api_client, reader):
        api_client.force_authenticate(reader)

        response = api_client.delete(url(999))

        assert response.status_code == 404
        assert response.data["message"] == "Comment not found."
