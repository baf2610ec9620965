"""
Application model.
"""

import uuid

from django.db import models


class Application(models.Model):
    """
    A software product licenses are bought for (e.g., Figma, Slack).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Application display name")
    link = models.CharField(max_length=500, blank=True, default="", help_text="External link")
    license_associations = models.PositiveIntegerField(
        default=0,
        help_text="Number of licenses referencing this application",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "applications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"]),
        ]

    def __str__(self):
        return self.name
