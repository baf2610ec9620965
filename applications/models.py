"""
Model registry for the applications app.
"""
from applications.infrastructure.models import Application  # noqa: F401
