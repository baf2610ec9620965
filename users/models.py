"""
Model registry for the users app.
"""
from users.infrastructure.models import User  # noqa: F401
