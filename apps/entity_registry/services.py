"""
apps.entity_registry.services
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Read-only queries over the entity registry.
"""
from __future__ import annotations

from django.db.models import F, Q

from .models import Bundle, EntityType, FieldDefinition


def get_entity_type(entity_type_id: str) -> EntityType | None:
    """Return the entity type with *entity_type_id*, or ``None`` if unknown."""
    return EntityType.objects.filter(pk=entity_type_id).first()


def list_bundles() -> list[Bundle]:
    """Every bundle of every entity type, ordered by entity type then name."""
    return list(
        Bundle.objects.select_related("entity_type").order_by("entity_type_id", "name")
    )


def get_field_definitions(entity_type_id: str, bundle: str) -> dict[str, dict]:
    """
    Return ``{field_name: definition}`` for one bundle of an entity type.

    Base fields come first, then the bundle's own fields, each group ordered
    by weight.  An unknown bundle yields the base fields only; an unknown
    entity type yields an empty dict.
    """
    definitions = (
        FieldDefinition.objects
        .filter(entity_type_id=entity_type_id)
        .filter(Q(bundle__isnull=True) | Q(bundle__name=bundle))
        .order_by(F("bundle").asc(nulls_first=True), "weight", "field_name")
    )
    return {
        definition.field_name: {
            "label": definition.label or definition.field_name,
            "field_type": definition.field_type,
            "base": definition.is_base_field,
        }
        for definition in definitions
    }
