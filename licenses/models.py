"""
Model registry for the licenses app.
"""
from licenses.infrastructure.models import License, LicenseUser  # noqa: F401
