"""
apps.resource_config.services.field_snapshot
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Builds the per-field override stubs stored in a resource configuration's
``resource_fields`` mapping.

A new configuration record must have the same shape as one edited by hand:
one override per field of the resource.  Which field names a resource has
depends on how its entity type describes itself, so every entity type is
classified once into an :class:`EntityKind` and dispatched accordingly:

=============  ==============================================================
Kind           Field names
=============  ==============================================================
``FIELDABLE``  Keys of the field definition registry for the type/bundle.
``CONFIG``     Keys of the type's exportable properties, or
               :data:`DEFAULT_CONFIG_PROPERTIES` when it declares none.
``OTHER``      None.  Unknown entity types land here too.
=============  ==============================================================

This module is **pure Python** — it has zero Django imports; the registries
are passed in by the caller.

Public API
----------
EntityKind            – Entity type classification
FieldOverride         – One field's override stub
FieldSnapshotBuilder  – Field enumeration + override construction
"""
from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, Protocol

#: Field names of a config entity type without an exportable-properties declaration.
DEFAULT_CONFIG_PROPERTIES: tuple[str, ...] = ("id", "type", "uuid", "_core")


class EntityKind(str, enum.Enum):
    FIELDABLE = "fieldable"
    CONFIG = "config"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------

class EntityTypeRegistry(Protocol):
    def get_kind(self, entity_type_id: str) -> EntityKind: ...

    def get_properties_to_export(self, entity_type_id: str) -> Mapping[str, Any] | None: ...


class FieldDefinitionRegistry(Protocol):
    def get_field_definitions(self, entity_type_id: str, bundle: str) -> Mapping[str, Any]: ...


class EnhancerManager(Protocol):
    def get_definition(self, enhancer_id: str) -> dict:
        """Return the enhancer plugin definition or raise ``PluginError``."""
        ...


# ---------------------------------------------------------------------------
# FieldOverride
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldOverride:
    """
    Override stub for one field of a resource.

    Attributes:
        field_name: Name of a real field on the entity.
        disabled: Whether the field is hidden from the API output.
        public_name: Name the field is exposed under; an empty value falls
            back to ``field_name``.
        enhancer_id: Id of the value-transform plugin; ``""`` means none.
    """

    field_name: str
    disabled: bool = False
    public_name: str = ""
    enhancer_id: str = ""

    def __post_init__(self) -> None:
        if not self.public_name:
            object.__setattr__(self, "public_name", self.field_name)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FieldOverride:
        return cls(
            field_name=data["field_name"],
            disabled=bool(data.get("disabled", False)),
            public_name=data.get("public_name") or "",
            enhancer_id=data.get("enhancer_id") or "",
        )


# ---------------------------------------------------------------------------
# FieldSnapshotBuilder
# ---------------------------------------------------------------------------

class FieldSnapshotBuilder:
    """
    Enumerates a resource's field names and builds its override stubs.

    Example::

        builder = FieldSnapshotBuilder(entity_types, field_definitions)
        builder.build_resource_fields("node", "article")
        # → {"title": {"field_name": "title", "disabled": False,
        #              "public_name": "title", "enhancer_id": ""}, ...}
    """

    def __init__(
        self,
        entity_types: EntityTypeRegistry,
        field_definitions: FieldDefinitionRegistry,
        enhancers: EnhancerManager | None = None,
    ) -> None:
        self.entity_types = entity_types
        self.field_definitions = field_definitions
        self.enhancers = enhancers

    def field_names_for(self, entity_type_id: str, bundle: str) -> list[str]:
        """
        Return every field name of the *entity_type_id*/*bundle* resource.

        Order is whatever the underlying registry returns.  Missing
        definitions are not an error: the result is simply empty.
        """
        kind = self.entity_types.get_kind(entity_type_id)

        if kind is EntityKind.FIELDABLE:
            definitions = self.field_definitions.get_field_definitions(entity_type_id, bundle)
            return list(definitions or {})

        if kind is EntityKind.CONFIG:
            export_properties = self.entity_types.get_properties_to_export(entity_type_id)
            if export_properties is None:
                return list(DEFAULT_CONFIG_PROPERTIES)
            return list(export_properties)

        return []

    def build_override(self, field_name: str, existing_record: Any = None) -> FieldOverride:
        """
        Build the override stub for *field_name*.

        When *existing_record* (any object with a ``resource_fields``
        mapping) holds an entry for the same field, its ``disabled``,
        ``public_name`` and ``enhancer_id`` are carried over.  Otherwise the
        defaults apply: enabled, exposed under its own name, no enhancer.

        Raises:
            common.exceptions.PluginError: (via the enhancer manager) when a
                carried-over ``enhancer_id`` names an unknown plugin.
        """
        prior = self._find_prior_override(field_name, existing_record)
        if prior is None:
            return FieldOverride(field_name=field_name)

        if prior.enhancer_id and self.enhancers is not None:
            self.enhancers.get_definition(prior.enhancer_id)
        return prior

    def build_resource_fields(
        self,
        entity_type_id: str,
        bundle: str,
        existing_record: Any = None,
    ) -> dict[str, dict[str, Any]]:
        """Return ``{field_name: override_dict}`` with one entry per field name."""
        return {
            field_name: self.build_override(field_name, existing_record).to_dict()
            for field_name in self.field_names_for(entity_type_id, bundle)
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _find_prior_override(field_name: str, existing_record: Any) -> FieldOverride | None:
        if existing_record is None:
            return None
        resource_fields = getattr(existing_record, "resource_fields", None) or {}
        for override in resource_fields.values():
            if override.get("field_name") == field_name:
                return FieldOverride.from_dict(override)
        return None
