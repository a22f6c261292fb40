from rest_framework import permissions

from books.permissions import is_librarian


class IsBorrowerOrLibrarian(permissions.BasePermission):
    """A loan is visible to the member who borrowed it and to library staff."""

    message = "You can only view your own loans."

    def has_object_permission(self, request, view, obj):
        return is_librarian(request.user) or obj.user_id == request.user.pk
