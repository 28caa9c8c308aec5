"""
apps.resource_config.gateways
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Django-backed implementations of the collaborators used by
:class:`~apps.resource_config.services.status_reconciler.StatusReconciler`
and :class:`~apps.resource_config.services.field_snapshot.FieldSnapshotBuilder`.

- :class:`ORMResourceConfigGateway`    – load/create/save ``ResourceConfig`` rows
- :class:`ModelEntityTypeRegistry`     – entity type classification
- :class:`ModelFieldDefinitionRegistry` – field definitions per bundle
- :class:`ResourceTypeInvalidator`     – cache reset + URL resolver reset
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from django.db import DatabaseError
from django.urls import clear_url_caches

from apps.entity_registry import services as entity_registry
from common.exceptions import StorageError
from .models import ResourceConfig
from .repository import ResourceTypeRepository
from .services.field_snapshot import EntityKind

logger = structlog.get_logger(__name__)


class ORMResourceConfigGateway:
    """Persistence gateway over the ``ResourceConfig`` table."""

    def load(self, resource_config_id: str) -> ResourceConfig | None:
        try:
            return ResourceConfig.objects.filter(pk=resource_config_id).first()
        except DatabaseError as exc:
            raise StorageError(
                f"Could not load resource config '{resource_config_id}': {exc}"
            ) from exc

    def create(self, **fields: Any) -> ResourceConfig:
        return ResourceConfig(**fields)

    def save(self, record: ResourceConfig) -> None:
        try:
            record.save()
        except DatabaseError as exc:
            logger.error(
                "resource_config_save_failed",
                resource_config_id=record.pk,
                error=str(exc),
            )
            raise StorageError(
                f"Could not save resource config '{record.pk}': {exc}"
            ) from exc


class ModelEntityTypeRegistry:
    def get_kind(self, entity_type_id: str) -> EntityKind:
        entity_type = entity_registry.get_entity_type(entity_type_id)
        if entity_type is None:
            return EntityKind.OTHER
        try:
            return EntityKind(entity_type.kind)
        except ValueError:
            # Rows written outside the admin can carry a kind with no meaning.
            logger.warning("entity_type_kind_unknown", entity_type_id=entity_type_id, kind=entity_type.kind)
            return EntityKind.OTHER

    def get_properties_to_export(self, entity_type_id: str) -> Mapping[str, Any] | None:
        entity_type = entity_registry.get_entity_type(entity_type_id)
        if entity_type is None:
            return None
        return entity_type.properties_to_export


class ModelFieldDefinitionRegistry:
    def get_field_definitions(self, entity_type_id: str, bundle: str) -> Mapping[str, Any]:
        return entity_registry.get_field_definitions(entity_type_id, bundle)


class ResourceTypeInvalidator:
    """Refreshes resource-type lookups and routes after a bulk change."""

    def __init__(self, repository: ResourceTypeRepository) -> None:
        self.repository = repository

    def invalidate_resource_type_cache(self) -> None:
        self.repository.reset()

    def mark_routes_for_rebuild(self) -> None:
        # Stands in for the JSON:API router: resource routes are served from
        # the resource-type listing, so only resolver caches need dropping here.
        clear_url_caches()
        logger.info("routes_marked_for_rebuild")
