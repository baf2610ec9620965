"""
Django admin configuration for users app.
"""
from django.contrib import admin

from users.infrastructure.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin interface for User model."""

    list_display = ["name", "license_count"]
    search_fields = ["name"]
    readonly_fields = ["id"]

    def license_count(self, obj):
        """Display number of licenses assigned to this user."""
        return obj.licenses.count()

    license_count.short_description = "Licenses"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).prefetch_related("licenses")
