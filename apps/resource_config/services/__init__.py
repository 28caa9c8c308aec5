"""
apps.resource_config.services package.

Only the pure-Python modules are re-exported here; import
:mod:`apps.resource_config.services.bulk_ops` explicitly for the
Django-wired entry points.
"""
from .field_snapshot import (  # noqa: F401
    DEFAULT_CONFIG_PROPERTIES,
    EntityKind,
    FieldOverride,
    FieldSnapshotBuilder,
)
from .status_reconciler import (  # noqa: F401
    ReconciliationResult,
    ResourceDescriptor,
    StatusReconciler,
)
