"""
Serializers for User API endpoints.
"""

from rest_framework import serializers


class UserSerializer(serializers.Serializer):
    """Serializer for User entities."""

    id = serializers.UUIDField()
    name = serializers.CharField()


class FindOrCreateUserRequestSerializer(serializers.Serializer):
    """Serializer for find-or-create user request."""

    name = serializers.CharField(max_length=255)

    def validate_name(self, value):
        """Validate name."""
        if not value.strip():
            raise serializers.ValidationError("User name cannot be empty")
        return value.strip()


class FindOrCreateUserResponseSerializer(serializers.Serializer):
    """Serializer for find-or-create user response."""

    user = UserSerializer()
    created = serializers.BooleanField()
