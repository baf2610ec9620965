"""
URL configuration for user API endpoints.
"""

from django.urls import path

from api.users import views

app_name = "users"

urlpatterns = [
    path(
        "",
        views.UserCollectionView.as_view(),
        name="user-list",
    ),
    path(
        "/find-or-create",
        views.FindOrCreateUserView.as_view(),
        name="user-find-or-create",
    ),
    path(
        "/delete/<uuid:user_id>",
        views.DeleteUserView.as_view(),
        name="user-delete",
    ),
]
