"""
Shared OpenAPI schema components.
"""

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers

ErrorResponseSerializer = inline_serializer(
    name="ErrorResponse",
    fields={
        "status": serializers.IntegerField(),
        "type": serializers.ChoiceField(
            choices=[
                "NotFound",
                "UpdateConflict",
                "DataDeletionError",
                "ValidationError",
                "InternalServerError",
            ]
        ),
        "message": serializers.CharField(),
        "details": serializers.CharField(),
    },
)

ERROR_RESPONSES = {
    400: ErrorResponseSerializer,
    404: ErrorResponseSerializer,
    409: ErrorResponseSerializer,
    500: ErrorResponseSerializer,
}
