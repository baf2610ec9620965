"""
Serializers for Application API endpoints.
"""

from rest_framework import serializers


class ApplicationSerializer(serializers.Serializer):
    """Serializer for Application entities."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    link = serializers.CharField(allow_blank=True)
    licenseAssociations = serializers.IntegerField(source="license_associations")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class CreateApplicationRequestSerializer(serializers.Serializer):
    """Serializer for create application request. The ID is always generated."""

    name = serializers.CharField(max_length=255)
    link = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")

    def validate_name(self, value):
        """Validate name."""
        if not value.strip():
            raise serializers.ValidationError("Application name cannot be empty")
        return value


class UpdateApplicationRequestSerializer(CreateApplicationRequestSerializer):
    """
    Serializer for update application request.

    licenseAssociations may be sent back by clients but is ignored.
    """

    updatedAt = serializers.DateTimeField()
