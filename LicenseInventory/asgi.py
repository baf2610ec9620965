"""
ASGI config for LicenseInventory.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseInventory.settings.dev")

application = get_asgi_application()
