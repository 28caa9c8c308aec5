"""
apps.resource_config.models
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
ResourceConfig – persisted exposure settings of one JSON:API resource.
"""
from django.db import models


class ResourceConfig(models.Model):
    """
    Configuration of one entity-type/bundle resource.

    Fields
    ------
    id
        ``<entity_type_id>--<bundle>``, e.g. ``"node--article"``.
    bundle
        Bundle machine name.
    resource_type
        Resource type name; same value as ``id``.
    path
        ``<entity_type_id>/<bundle>``, the resource's URL path segment.
    disabled
        Whether the resource is hidden from the API.
    resource_fields
        JSONB blob shaped as ``{field_name: override}`` where every override
        holds ``field_name``, ``disabled``, ``public_name`` and
        ``enhancer_id``.
    """

    id = models.CharField(max_length=255, primary_key=True)
    bundle = models.CharField(max_length=128)
    resource_type = models.CharField(max_length=255)
    path = models.CharField(max_length=255)
    disabled = models.BooleanField(default=False)
    resource_fields = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name = "Resource Config"
        verbose_name_plural = "Resource Configs"

    def __str__(self) -> str:
        status = "disabled" if self.disabled else "enabled"
        return f"{self.id} [{status}]"
