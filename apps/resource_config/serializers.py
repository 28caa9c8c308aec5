"""
apps.resource_config.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the resource configuration API.
No business logic; shape validation only.
"""
from rest_framework import serializers

from .models import ResourceConfig


class ResourceConfigSerializer(serializers.ModelSerializer):
    """Read serializer for a full ResourceConfig object."""

    class Meta:
        model = ResourceConfig
        fields = [
            "id",
            "bundle",
            "resource_type",
            "path",
            "disabled",
            "resource_fields",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ResourceTypeSerializer(serializers.Serializer):
    """One entry of the resolved resource-type listing."""

    resource_type = serializers.CharField()
    entity_type_id = serializers.CharField()
    bundle = serializers.CharField()
    path = serializers.CharField()
    disabled = serializers.BooleanField()
    configured = serializers.BooleanField()


class BulkOperationResponseSerializer(serializers.Serializer):
    """Response shape for POST /resources/bulk/{disable,enable}/."""

    detail = serializers.CharField()
    created = serializers.IntegerField()
    updated = serializers.IntegerField()
