"""
apps.entity_registry.models
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
The content model exposed through the JSON:API layer.

Models
------
EntityType
    A kind of content (``node``, ``user``, ``menu`` …) and how it describes
    its fields.

Bundle
    A sub-type of an entity type (``node/article``).  Every bundle is one
    API resource.

FieldDefinition
    A field on an entity type.  Base fields (``bundle`` is NULL) are shared by
    every bundle of the type; bundle fields belong to one bundle only.
"""
from django.db import models


class EntityType(models.Model):
    """
    An entity type, identified by its machine name.

    ``kind`` decides where the field names of its resources come from:

    - ``fieldable`` – the :class:`FieldDefinition` rows of the type/bundle.
    - ``config`` – the keys of ``properties_to_export``.  NULL means the type
      declares nothing and the fixed ``id/type/uuid/_core`` set is used.
    - ``other`` – no fields at all.
    """

    class Kind(models.TextChoices):
        FIELDABLE = "fieldable", "Fieldable content entity"
        CONFIG = "config", "Configuration entity"
        OTHER = "other", "Other"

    id = models.CharField(
        max_length=32,
        primary_key=True,
        help_text="Machine name, e.g. 'node' or 'taxonomy_term'.",
    )
    label = models.CharField(max_length=255)
    kind = models.CharField(
        max_length=16,
        choices=Kind.choices,
        default=Kind.FIELDABLE,
    )
    properties_to_export = models.JSONField(
        null=True,
        blank=True,
        help_text=(
            "Exportable properties of a config entity type, as "
            "{property: property}.  Leave empty when the type declares none."
        ),
    )

    class Meta:
        ordering = ["id"]
        verbose_name = "Entity Type"
        verbose_name_plural = "Entity Types"

    def __str__(self) -> str:
        return self.id


class Bundle(models.Model):
    entity_type = models.ForeignKey(
        EntityType,
        on_delete=models.CASCADE,
        related_name="bundles",
    )
    name = models.CharField(max_length=128)
    label = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ["entity_type", "name"]
        unique_together = [("entity_type", "name")]
        verbose_name = "Bundle"
        verbose_name_plural = "Bundles"

    def __str__(self) -> str:
        return f"{self.entity_type_id}/{self.name}"


class FieldDefinition(models.Model):
    entity_type = models.ForeignKey(
        EntityType,
        on_delete=models.CASCADE,
        related_name="field_definitions",
    )
    bundle = models.ForeignKey(
        Bundle,
        on_delete=models.CASCADE,
        related_name="field_definitions",
        null=True,
        blank=True,
        help_text="Leave empty for a base field shared by every bundle.",
    )
    field_name = models.CharField(max_length=128)
    label = models.CharField(max_length=255, blank=True, default="")
    field_type = models.CharField(max_length=64, default="string")
    weight = models.IntegerField(default=0)

    class Meta:
        ordering = ["entity_type", "weight", "field_name"]
        constraints = [
            models.UniqueConstraint(
                fields=["entity_type", "bundle", "field_name"],
                name="unique_bundle_field",
            ),
            models.UniqueConstraint(
                fields=["entity_type", "field_name"],
                condition=models.Q(bundle__isnull=True),
                name="unique_base_field",
            ),
        ]
        verbose_name = "Field Definition"
        verbose_name_plural = "Field Definitions"

    @property
    def is_base_field(self) -> bool:
        return self.bundle_id is None

    def __str__(self) -> str:
        scope = self.bundle.name if self.bundle_id else "*"
        return f"{self.entity_type_id}/{scope}.{self.field_name}"
