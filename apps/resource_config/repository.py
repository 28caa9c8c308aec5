"""
apps.resource_config.repository
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Resource types known to the JSON:API layer.

Every bundle in the entity registry is one resource.  :meth:`all` enumerates
them for the bulk operations; :meth:`resource_types` joins them with their
stored configuration and caches the result until :meth:`reset` is called.
"""
from __future__ import annotations

import structlog
from django.conf import settings
from django.core.cache import cache as default_cache

from apps.entity_registry import services as entity_registry
from .models import ResourceConfig
from .services.status_reconciler import ResourceDescriptor

logger = structlog.get_logger(__name__)


class ResourceTypeRepository:
    def __init__(self, cache=None, cache_key: str | None = None, timeout: int | None = None) -> None:
        self.cache = cache if cache is not None else default_cache
        self.cache_key = cache_key or settings.RESOURCE_TYPE_CACHE_KEY
        self.timeout = timeout if timeout is not None else settings.RESOURCE_TYPE_CACHE_TIMEOUT

    def all(self) -> list[ResourceDescriptor]:
        """Return one descriptor per bundle, ordered by entity type then bundle."""
        return [
            ResourceDescriptor(entity_type_id=bundle.entity_type_id, bundle=bundle.name)
            for bundle in entity_registry.list_bundles()
        ]

    def resource_types(self) -> list[dict]:
        """
        Return the resolved resource-type listing, from cache when possible.

        Resources without a stored configuration are reported as enabled
        under their default path.
        """
        cached = self.cache.get(self.cache_key)
        if cached is not None:
            return cached

        configs = ResourceConfig.objects.in_bulk()
        resource_types = []
        for descriptor in self.all():
            config = configs.get(descriptor.resource_config_id)
            resource_types.append(
                {
                    "resource_type": descriptor.resource_config_id,
                    "entity_type_id": descriptor.entity_type_id,
                    "bundle": descriptor.bundle,
                    "path": config.path if config else descriptor.path,
                    "disabled": config.disabled if config else False,
                    "configured": config is not None,
                }
            )

        self.cache.set(self.cache_key, resource_types, timeout=self.timeout)
        logger.debug("resource_types_built", count=len(resource_types))
        return resource_types

    def reset(self) -> None:
        """Drop the cached resource-type listing."""
        self.cache.delete(self.cache_key)
        logger.debug("resource_type_cache_reset", cache_key=self.cache_key)
