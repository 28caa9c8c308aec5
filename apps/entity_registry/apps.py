"""
apps.entity_registry.apps
"""
from django.apps import AppConfig


class EntityRegistryConfig(AppConfig):
    name = "apps.entity_registry"
    label = "entity_registry"
    verbose_name = "Entity Registry"
