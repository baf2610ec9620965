"""
URL configuration for application API endpoints.
"""

from django.urls import path

from api.applications import views

app_name = "applications"

urlpatterns = [
    path(
        "",
        views.ApplicationCollectionView.as_view(),
        name="application-list",
    ),
    path(
        "/<uuid:application_id>",
        views.ApplicationDetailView.as_view(),
        name="application-detail",
    ),
]
