from django.conf import settings
from django.db import models

from books.models import Book

# Staff comment on behalf of the library, not as themselves.
LIBRARY_DISPLAY_NAME = "BookNest"


class Comment(models.Model):
    book = models.ForeignKey(Book, on_delete=models.CASCADE, related_name="comments")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="comments"
    )
    # Name and role as they were when the comment was posted.
    author_name = models.CharField(max_length=150)
    author_role = models.CharField(max_length=5)
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.author_name} on {self.book.title}"

    def save(self, *args, **kwargs):
        if not self.author_name:
            self.author_name = LIBRARY_DISPLAY_NAME if self.user.is_staff else self.user.name
            self.author_role = self.user.role
        super().save(*args, **kwargs)

    def can_be_deleted_by(self, user):
        return user.is_staff or self.user_id == user.pk
