"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from licenses.infrastructure.models import License, LicenseUser


class LicenseUserInline(admin.TabularInline):
    """Inline admin for user assignments."""

    model = LicenseUser
    extra = 0
    readonly_fields = ["created_at"]
    autocomplete_fields = ["user"]


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """
    Admin interface for License model.

    Assignments can be inspected here, but application changes should go
    through the API so license counts stay consistent.
    """

    list_display = [
        "application",
        "contact_person",
        "renewal_display",
        "auto_renewal",
        "cost",
        "user_count",
        "updated_at",
    ]
    list_filter = ["auto_renewal", "category", "status", "renewal_date"]
    search_fields = [
        "application__name",
        "contact_person",
        "category",
        "status",
        "comment",
    ]
    readonly_fields = ["id", "application", "created_at", "updated_at"]
    inlines = [LicenseUserInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "application", "category", "status"),
            },
        ),
        (
            "Renewal",
            {
                "fields": ("renewal_date", "renewal_interval", "auto_renewal", "cost"),
            },
        ),
        (
            "Contact",
            {
                "fields": ("contact_person", "additional_contact_info", "comment"),
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

    def renewal_display(self, obj):
        """Display renewal date, highlighted once it has passed."""
        if obj.renewal_date is None:
            return "-"
        if obj.renewal_date < timezone.localdate():
            return format_html('<span style="color: red;">{}</span>', obj.renewal_date)
        return obj.renewal_date

    renewal_display.short_description = "Renewal date"

    def user_count(self, obj):
        """Display number of assigned users."""
        return obj.license_users.count()

    user_count.short_description = "Users"

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return (
            super()
            .get_queryset(request)
            .select_related("application")
            .prefetch_related("license_users")
        )
