from rest_framework import permissions


def is_librarian(user):
    return bool(user and user.is_authenticated and user.is_staff)


class IsLibrarianOrReadOnly(permissions.BasePermission):
    """
    Anyone may browse the catalog, signed in or not. Adding, editing and
    removing books is reserved for library staff.
    """

    message = "Only library staff can change the catalog."

    def has_permission(self, request, view):
        return request.method in permissions.SAFE_METHODS or is_librarian(request.user)
