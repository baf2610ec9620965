"""
Serializers for License API endpoints.
"""

import uuid
from decimal import Decimal
from typing import List, Optional

from rest_framework import serializers

from api.applications.serializers import ApplicationSerializer
from api.users.serializers import UserSerializer
from licenses.domain.license import LicenseAttributes


class LicenseSerializer(serializers.Serializer):
    """Serializer for License entities with their application and users."""

    id = serializers.UUIDField()
    applicationId = serializers.UUIDField(source="attributes.application_id")
    renewalDate = serializers.DateField(source="attributes.renewal_date", allow_null=True)
    autoRenewal = serializers.BooleanField(source="attributes.auto_renewal")
    cost = serializers.DecimalField(
        source="attributes.cost", max_digits=12, decimal_places=2, allow_null=True
    )
    renewalInterval = serializers.CharField(source="attributes.renewal_interval")
    category = serializers.CharField(source="attributes.category")
    status = serializers.CharField(source="attributes.status")
    contactPerson = serializers.CharField(source="attributes.contact_person")
    additionalContactInfo = serializers.CharField(source="attributes.additional_contact_info")
    comment = serializers.CharField(source="attributes.comment")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    application = ApplicationSerializer(allow_null=True)
    users = UserSerializer(many=True)


class UserReferenceSerializer(serializers.Serializer):
    """A user assigned to a license; only the ID is used."""

    id = serializers.UUIDField()
    name = serializers.CharField(required=False)


class LicenseFieldsSerializer(serializers.Serializer):
    """Editable license fields shared by create and update requests."""

    applicationId = serializers.UUIDField()
    renewalDate = serializers.DateField(required=False, allow_null=True, default=None)
    autoRenewal = serializers.BooleanField(required=False, default=False)
    cost = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
        default=None,
    )
    renewalInterval = serializers.CharField(
        max_length=100, required=False, allow_blank=True, default=""
    )
    category = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    status = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    contactPerson = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )
    additionalContactInfo = serializers.CharField(required=False, allow_blank=True, default="")
    comment = serializers.CharField(required=False, allow_blank=True, default="")
    users = UserReferenceSerializer(many=True, required=False)

    @staticmethod
    def to_attributes(data: dict) -> LicenseAttributes:
        """Convert validated data to domain attributes."""
        return LicenseAttributes(
            application_id=data["applicationId"],
            renewal_date=data.get("renewalDate"),
            auto_renewal=data.get("autoRenewal", False),
            cost=data.get("cost"),
            renewal_interval=data.get("renewalInterval", ""),
            category=data.get("category", ""),
            status=data.get("status", ""),
            contact_person=data.get("contactPerson", ""),
            additional_contact_info=data.get("additionalContactInfo", ""),
            comment=data.get("comment", ""),
        )

    @staticmethod
    def to_user_ids(data: dict) -> Optional[List[uuid.UUID]]:
        """User IDs from validated data, or None when users were not sent."""
        if "users" not in data:
            return None
        return [user["id"] for user in data["users"]]


class UpdatedLicenseSerializer(LicenseFieldsSerializer):
    """License fields plus the updatedAt value last read."""

    updatedAt = serializers.DateTimeField()


class UpdateLicenseRequestSerializer(serializers.Serializer):
    """
    Serializer for update license request.

    currentLicense is accepted for compatibility; the stored row is the
    authority on the previous application.
    """

    currentLicense = serializers.DictField(required=False)
    updatedLicense = UpdatedLicenseSerializer()


class LicenseCountsSerializer(serializers.Serializer):
    """Serializer for per-filter license counts."""

    all = serializers.IntegerField()
    assigned = serializers.IntegerField()
    unassigned = serializers.IntegerField()
    nearExpiration = serializers.IntegerField(source="near_expiration")
    expired = serializers.IntegerField()
