"""
apps.resource_config.apps
"""
from django.apps import AppConfig


class ResourceConfigConfig(AppConfig):
    name = "apps.resource_config"
    label = "resource_config"
    verbose_name = "JSON:API Resource Config"

    def ready(self) -> None:
        from .signals import connect_signals  # noqa: PLC0415

        connect_signals()
