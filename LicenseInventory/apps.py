"""
App configuration for License Inventory.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

SKIPPED_COMMANDS = [
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "test",
    "check",
    "createsuperuser",
]


class LicenseInventoryConfig(AppConfig):
    """App configuration for LicenseInventory."""

    name = "LicenseInventory"
    verbose_name = "License Inventory"

    def ready(self):
        """Called when Django starts."""
        if len(sys.argv) > 1 and sys.argv[1] in SKIPPED_COMMANDS:
            return

        # Django's autoreloader imports the project twice
        if os.environ.get("RUN_MAIN") == "false":
            return

        if not getattr(settings, "OTEL_ENABLED", False):
            return

        if not hasattr(self, "_initialized"):
            from core.instrumentation import setup_opentelemetry

            logger.info("Setting up observability...")
            setup_opentelemetry()
            self._initialized = True
            logger.info("Observability setup complete")
