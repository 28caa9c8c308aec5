"""
apps.resource_config.services.status_reconciler
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Sets the ``disabled`` flag of every resource configuration in one pass.

For each resource yielded by the enumerator:

1. compute its configuration id (``<entity_type_id>--<bundle>``);
2. load the configuration record;
3. if it exists, set ``disabled = not enable`` and save it; its
   ``resource_fields`` overrides are left exactly as stored;
4. otherwise create a record with the default shape, seed
   ``resource_fields`` from the :class:`FieldSnapshotBuilder`, set
   ``disabled = not enable`` and save it.

Once every resource has been handled, the invalidator is told (once) to drop
the resource-type cache and rebuild routes.

The batch is **not** atomic.  A storage failure propagates to the caller
immediately; records saved before it stay saved and the invalidator is not
called.

This module is **pure Python** — it has zero Django imports; all
collaborators are passed to the constructor.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog

from .field_snapshot import FieldSnapshotBuilder

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResourceDescriptor:
    """One entity-type/bundle pair exposed through the API layer."""

    entity_type_id: str
    bundle: str

    @property
    def resource_config_id(self) -> str:
        return f"{self.entity_type_id}--{self.bundle}"

    @property
    def path(self) -> str:
        return f"{self.entity_type_id}/{self.bundle}"


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------

class ResourceEnumerator(Protocol):
    def all(self) -> Iterable[ResourceDescriptor]: ...


class PersistenceGateway(Protocol):
    def load(self, resource_config_id: str) -> Any | None: ...

    def create(self, **fields: Any) -> Any:
        """Build an unsaved record from *fields*."""
        ...

    def save(self, record: Any) -> None:
        """Persist *record*; raise ``StorageError`` on backend failure."""
        ...


class CacheRouteInvalidator(Protocol):
    def invalidate_resource_type_cache(self) -> None: ...

    def mark_routes_for_rebuild(self) -> None: ...


@dataclass
class ReconciliationResult:
    """Outcome of one :meth:`StatusReconciler.reconcile_all` call."""

    enabled: bool
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.updated)


class StatusReconciler:
    """
    Bulk enable/disable of resource configurations.

    Example::

        reconciler = StatusReconciler(
            enumerator=repository,
            gateway=ORMResourceConfigGateway(),
            snapshot_builder=FieldSnapshotBuilder(entity_types, field_definitions),
            invalidator=ResourceTypeInvalidator(repository),
        )
        reconciler.reconcile_all(enable=False)
    """

    def __init__(
        self,
        *,
        enumerator: ResourceEnumerator,
        gateway: PersistenceGateway,
        snapshot_builder: FieldSnapshotBuilder,
        invalidator: CacheRouteInvalidator,
    ) -> None:
        self.enumerator = enumerator
        self.gateway = gateway
        self.snapshot_builder = snapshot_builder
        self.invalidator = invalidator

    def reconcile_all(self, enable: bool) -> ReconciliationResult:
        """
        Set ``disabled = not enable`` on the configuration of every resource.

        Args:
            enable: ``True`` to enable every resource, ``False`` to disable.

        Returns:
            A :class:`ReconciliationResult` listing the created and updated
            configuration ids.

        Raises:
            common.exceptions.StorageError: Propagated from the gateway; the
                remaining resources are skipped.
        """
        disabled = not enable
        result = ReconciliationResult(enabled=enable)

        for descriptor in self.enumerator.all():
            resource_config_id = descriptor.resource_config_id
            record = self.gateway.load(resource_config_id)

            if record is not None:
                record.disabled = disabled
                self.gateway.save(record)
                result.updated.append(resource_config_id)
                logger.debug(
                    "resource_config_updated",
                    resource_config_id=resource_config_id,
                    disabled=disabled,
                )
                continue

            record = self._create_record(descriptor, disabled)
            self.gateway.save(record)
            result.created.append(resource_config_id)
            logger.debug(
                "resource_config_created",
                resource_config_id=resource_config_id,
                disabled=disabled,
                field_count=len(record.resource_fields),
            )

        self.invalidator.invalidate_resource_type_cache()
        self.invalidator.mark_routes_for_rebuild()

        logger.info(
            "resource_status_reconciled",
            enabled=enable,
            created=len(result.created),
            updated=len(result.updated),
        )
        return result

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _create_record(self, descriptor: ResourceDescriptor, disabled: bool) -> Any:
        # A record is only created when none exists, so there are no prior
        # overrides to carry over: every field gets the default stub.
        resource_fields = self.snapshot_builder.build_resource_fields(
            descriptor.entity_type_id,
            descriptor.bundle,
        )
        return self.gateway.create(
            id=descriptor.resource_config_id,
            bundle=descriptor.bundle,
            resource_type=descriptor.resource_config_id,
            path=descriptor.path,
            disabled=disabled,
            resource_fields=resource_fields,
        )
