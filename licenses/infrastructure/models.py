"""
License and LicenseUser models.
"""
import uuid

from django.db import models


class License(models.Model):
    """
    A purchased license for an application.

    Creating, moving or deleting a license adjusts the referenced
    application's license_associations counter in the same transaction.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    application = models.ForeignKey(
        "applications.Application",
        on_delete=models.PROTECT,
        related_name="licenses",
    )
    users = models.ManyToManyField(
        "users.User",
        through="LicenseUser",
        related_name="licenses",
        blank=True,
    )
    renewal_date = models.DateField(null=True, blank=True, db_index=True)
    auto_renewal = models.BooleanField(default=False)
    cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    renewal_interval = models.CharField(max_length=100, blank=True, default="")
    category = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(max_length=100, blank=True, default="")
    contact_person = models.CharField(max_length=255, blank=True, default="")
    additional_contact_info = models.TextField(blank=True, default="")
    comment = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["application", "renewal_date"]),
        ]

    def __str__(self):
        return f"{self.application_id} ({self.renewal_date or 'no renewal date'})"


class LicenseUser(models.Model):
    """Assignment of a user to a license."""

    license = models.ForeignKey(License, on_delete=models.CASCADE, related_name="license_users")
    user = models.ForeignKey("users.User", on_delete=models.CASCADE, related_name="license_users")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_users"
        constraints = [
            models.UniqueConstraint(fields=["license", "user"], name="unique_license_user"),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.license_id}"
