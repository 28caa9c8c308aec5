"""
apps.resource_config.views
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Thin DRF API views for the resource configuration application.
All business logic is delegated to
:mod:`apps.resource_config.services.bulk_ops`.

Endpoints
---------
GET    /resources/                  – Resolved resource-type listing (cached)
POST   /resources/bulk/disable/     – Disable every resource (staff only)
POST   /resources/bulk/enable/      – Enable every resource (staff only)
GET    /resource-configs/           – Stored resource configurations
GET    /resource-configs/{id}/      – One stored resource configuration
"""
from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import NotFoundError
from .models import ResourceConfig
from .serializers import (
    BulkOperationResponseSerializer,
    ResourceConfigSerializer,
    ResourceTypeSerializer,
)
from .services import bulk_ops


def _bulk_response(result, message: str) -> Response:
    return Response(
        {
            "detail": message,
            "created": len(result.created),
            "updated": len(result.updated),
        },
        status=status.HTTP_200_OK,
    )


class ResourceTypeListView(APIView):
    """GET /resources/ – resolved resource types with their status."""

    @extend_schema(
        summary="List Resource Types",
        responses={200: ResourceTypeSerializer(many=True)},
        tags=["Resources"],
    )
    def get(self, request: Request) -> Response:
        return Response(ResourceTypeSerializer(bulk_ops.get_resource_types(), many=True).data)


class BulkDisableView(APIView):
    """POST /resources/bulk/disable/ – disable every resource."""

    permission_classes = [IsAdminUser]

    @extend_schema(
        summary="Disable All Resources",
        description=(
            "Sets disabled=true on the configuration of every resource, "
            "creating missing configurations with default field overrides."
        ),
        request=None,
        responses={
            200: BulkOperationResponseSerializer,
            503: OpenApiResponse(description="The configuration store failed mid-batch."),
        },
        tags=["Resources"],
    )
    def post(self, request: Request) -> Response:
        result, message = bulk_ops.disable_all_resources()
        return _bulk_response(result, message)


class BulkEnableView(APIView):
    """POST /resources/bulk/enable/ – enable every resource."""

    permission_classes = [IsAdminUser]

    @extend_schema(
        summary="Enable All Resources",
        description=(
            "Sets disabled=false on the configuration of every resource, "
            "creating missing configurations with default field overrides."
        ),
        request=None,
        responses={
            200: BulkOperationResponseSerializer,
            503: OpenApiResponse(description="The configuration store failed mid-batch."),
        },
        tags=["Resources"],
    )
    def post(self, request: Request) -> Response:
        result, message = bulk_ops.enable_all_resources()
        return _bulk_response(result, message)


class ResourceConfigListView(APIView):
    """GET /resource-configs/"""

    @extend_schema(
        summary="List Resource Configs",
        responses={200: ResourceConfigSerializer(many=True)},
        tags=["Resource Configs"],
    )
    def get(self, request: Request) -> Response:
        configs = ResourceConfig.objects.all()
        disabled_param = request.query_params.get("disabled")
        if disabled_param is not None:
            configs = configs.filter(disabled=disabled_param.lower() in ("1", "true", "yes"))
        return Response(ResourceConfigSerializer(configs, many=True).data)


class ResourceConfigDetailView(APIView):
    """GET /resource-configs/<pk>/"""

    @extend_schema(
        summary="Get Resource Config",
        responses={
            200: ResourceConfigSerializer,
            404: OpenApiResponse(description="No configuration stored for that resource."),
        },
        tags=["Resource Configs"],
    )
    def get(self, request: Request, pk: str) -> Response:
        config = ResourceConfig.objects.filter(pk=pk).first()
        if config is None:
            raise NotFoundError(f"ResourceConfig '{pk}' not found.")
        return Response(ResourceConfigSerializer(config).data)
