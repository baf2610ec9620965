"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.licenses import views

app_name = "licenses"

urlpatterns = [
    path(
        "",
        views.LicenseCollectionView.as_view(),
        name="license-list",
    ),
    path(
        "/query",
        views.LicenseQueryView.as_view(),
        name="license-query",
    ),
    path(
        "/counts",
        views.LicenseCountsView.as_view(),
        name="license-counts",
    ),
    path(
        "/<uuid:license_id>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
]
