"""
Django admin configuration for applications app.
"""
from django.contrib import admin

from applications.infrastructure.models import Application


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    """Admin interface for Application model."""

    list_display = ["name", "link", "license_associations", "created_at", "updated_at"]
    search_fields = ["name", "link"]
    readonly_fields = ["id", "license_associations", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "link"),
            },
        ),
        (
            "Licenses",
            {
                "fields": ("license_associations",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )
