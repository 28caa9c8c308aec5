"""
apps.resource_config.signals
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Drops the cached resource-type listing whenever a row it is built from
changes, whether through the bulk operations, the admin or the ORM.
"""
import structlog
from django.db.models.signals import post_delete, post_save

from apps.entity_registry.models import Bundle, EntityType, FieldDefinition
from .models import ResourceConfig
from .repository import ResourceTypeRepository

logger = structlog.get_logger(__name__)

#: Models whose rows feed :meth:`ResourceTypeRepository.resource_types`.
WATCHED_MODELS = (ResourceConfig, EntityType, Bundle, FieldDefinition)


def reset_resource_types(sender, instance, **kwargs) -> None:
    logger.debug(
        "resource_type_source_changed",
        model=sender._meta.label,
        pk=str(instance.pk),
    )
    ResourceTypeRepository().reset()


def connect_signals() -> None:
    for model in WATCHED_MODELS:
        uid = f"reset_resource_types:{model._meta.label_lower}"
        post_save.connect(reset_resource_types, sender=model, dispatch_uid=f"{uid}:save")
        post_delete.connect(reset_resource_types, sender=model, dispatch_uid=f"{uid}:delete")
