"""
User model.
"""

import uuid

from django.db import models


class User(models.Model):
    """
    A person licenses can be assigned to.

    Not an authentication account; only the name is tracked.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True)

    class Meta:
        db_table = "users"
        ordering = ["name"]

    def __str__(self):
        return self.name
