from django.urls import path

from comments.views import CommentView

app_name = "comments"

urlpatterns = [
    path("<int:pk>/", CommentView.as_view(), name="comment"),
]
