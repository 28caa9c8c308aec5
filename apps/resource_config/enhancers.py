"""
apps.resource_config.enhancers
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Registry of field enhancer plugins an override may reference by id.
The known ids come from the ``JSONAPI_FIELD_ENHANCERS`` setting.
"""
from __future__ import annotations

from collections.abc import Iterable

from django.conf import settings

from common.exceptions import PluginError


class EnhancerRegistry:
    def __init__(self, enhancer_ids: Iterable[str] | None = None) -> None:
        if enhancer_ids is None:
            enhancer_ids = settings.JSONAPI_FIELD_ENHANCERS
        self._enhancer_ids = frozenset(enhancer_ids)

    def has_definition(self, enhancer_id: str) -> bool:
        return enhancer_id in self._enhancer_ids

    def get_definition(self, enhancer_id: str) -> dict:
        """Return ``{"id": enhancer_id}`` or raise :class:`PluginError`."""
        if not self.has_definition(enhancer_id):
            raise PluginError(f"The '{enhancer_id}' enhancer plugin does not exist.")
        return {"id": enhancer_id}
