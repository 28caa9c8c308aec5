"""
apps.resource_config.urls
~~~~~~~~~~~~~~~~~~~~~~~~~~
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import (
    BulkDisableView,
    BulkEnableView,
    ResourceConfigDetailView,
    ResourceConfigListView,
    ResourceTypeListView,
)

urlpatterns = [
    path("resources/", ResourceTypeListView.as_view(), name="resource-type-list"),
    path("resources/bulk/disable/", BulkDisableView.as_view(), name="resource-bulk-disable"),
    path("resources/bulk/enable/", BulkEnableView.as_view(), name="resource-bulk-enable"),
    path("resource-configs/", ResourceConfigListView.as_view(), name="resource-config-list"),
    path(
        "resource-configs/<str:pk>/",
        ResourceConfigDetailView.as_view(),
        name="resource-config-detail",
    ),
]
