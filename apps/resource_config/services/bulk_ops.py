"""
apps.resource_config.services.bulk_ops
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
The two administrative bulk operations: disable or enable every resource.

Views and the admin page must call only these functions.  They wire the
Django-backed collaborators into a
:class:`~apps.resource_config.services.status_reconciler.StatusReconciler`
and return the confirmation message shown to the administrator.
"""
from __future__ import annotations

import structlog

from apps.resource_config.enhancers import EnhancerRegistry
from apps.resource_config.gateways import (
    ModelEntityTypeRegistry,
    ModelFieldDefinitionRegistry,
    ORMResourceConfigGateway,
    ResourceTypeInvalidator,
)
from apps.resource_config.repository import ResourceTypeRepository
from .field_snapshot import FieldSnapshotBuilder
from .status_reconciler import ReconciliationResult, StatusReconciler

logger = structlog.get_logger(__name__)

DISABLED_MESSAGE = "All resources successfully disabled."
ENABLED_MESSAGE = "All resources successfully enabled."


def build_reconciler(repository: ResourceTypeRepository | None = None) -> StatusReconciler:
    """Return a reconciler backed by the ORM, the entity registry and the cache."""
    repository = repository or ResourceTypeRepository()
    return StatusReconciler(
        enumerator=repository,
        gateway=ORMResourceConfigGateway(),
        snapshot_builder=FieldSnapshotBuilder(
            entity_types=ModelEntityTypeRegistry(),
            field_definitions=ModelFieldDefinitionRegistry(),
            enhancers=EnhancerRegistry(),
        ),
        invalidator=ResourceTypeInvalidator(repository),
    )


def disable_all_resources(
    *, reconciler: StatusReconciler | None = None
) -> tuple[ReconciliationResult, str]:
    """
    Disable every resource.

    Returns:
        ``(result, message)`` – the reconciliation summary and the
        confirmation text for the administrator.

    Raises:
        common.exceptions.StorageError: If a configuration cannot be loaded
            or saved.  Resources handled before the failure stay disabled.
    """
    result = (reconciler or build_reconciler()).reconcile_all(enable=False)
    logger.info("all_resources_disabled", created=len(result.created), updated=len(result.updated))
    return result, DISABLED_MESSAGE


def enable_all_resources(
    *, reconciler: StatusReconciler | None = None
) -> tuple[ReconciliationResult, str]:
    """Enable every resource.  Same contract as :func:`disable_all_resources`."""
    result = (reconciler or build_reconciler()).reconcile_all(enable=True)
    logger.info("all_resources_enabled", created=len(result.created), updated=len(result.updated))
    return result, ENABLED_MESSAGE


def get_resource_types() -> list[dict]:
    """Return the cached resource-type listing."""
    return ResourceTypeRepository().resource_types()
