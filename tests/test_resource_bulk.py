"""
tests.test_resource_bulk
~~~~~~~~~~~~~~~~~~~~~~~~~
pytest-django test suite for the jsonapi_bulk project.

Covers:
- FieldSnapshotBuilder  (unit, no DB)
- StatusReconciler      (unit, no DB, in-memory collaborators)
- Entity registry + ORM adapters  (integration, DB)
- Bulk operations + resource-type cache  (integration, DB)
- API endpoints and the admin bulk page  (integration, DB)
"""
from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from unittest import mock

import pytest
from django.core.cache import cache
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.entity_registry import services as entity_registry
from apps.entity_registry.models import Bundle, EntityType, FieldDefinition
from apps.resource_config.enhancers import EnhancerRegistry
from apps.resource_config.gateways import (
    ModelEntityTypeRegistry,
    ORMResourceConfigGateway,
)
from apps.resource_config.models import ResourceConfig
from apps.resource_config.services import bulk_ops
from apps.resource_config.services.field_snapshot import (
    DEFAULT_CONFIG_PROPERTIES,
    EntityKind,
    FieldOverride,
    FieldSnapshotBuilder,
)
from apps.resource_config.services.status_reconciler import (
    ResourceDescriptor,
    StatusReconciler,
)
from common.exceptions import PluginError, StorageError


# ===========================================================================
# In-memory collaborators
# ===========================================================================

@dataclass
class FakeRecord:
    id: str
    bundle: str
    resource_type: str
    path: str
    disabled: bool = False
    resource_fields: dict = field(default_factory=dict)


class FakeEnumerator:
    def __init__(self, *pairs: tuple[str, str]) -> None:
        self.descriptors = [ResourceDescriptor(entity_type_id=e, bundle=b) for e, b in pairs]

    def all(self):
        return list(self.descriptors)


class FakeGateway:
    def __init__(self, records=(), fail_on: str | None = None) -> None:
        self.records = {record.id: record for record in records}
        self.fail_on = fail_on
        self.saved: list[str] = []

    def load(self, resource_config_id):
        return self.records.get(resource_config_id)

    def create(self, **fields):
        return FakeRecord(**fields)

    def save(self, record):
        if record.id == self.fail_on:
            raise StorageError(f"Could not save resource config '{record.id}'.")
        self.records[record.id] = record
        self.saved.append(record.id)


class FakeEntityTypes:
    def __init__(self, kinds: dict, export_properties: dict | None = None) -> None:
        self.kinds = kinds
        self.export_properties = export_properties or {}

    def get_kind(self, entity_type_id):
        return self.kinds.get(entity_type_id, EntityKind.OTHER)

    def get_properties_to_export(self, entity_type_id):
        return self.export_properties.get(entity_type_id)


class FakeFieldDefinitions:
    def __init__(self, definitions: dict) -> None:
        self.definitions = definitions

    def get_field_definitions(self, entity_type_id, bundle):
        return self.definitions.get((entity_type_id, bundle), {})


class FakeInvalidator:
    def __init__(self) -> None:
        self.cache_resets = 0
        self.route_rebuilds = 0

    def invalidate_resource_type_cache(self):
        self.cache_resets += 1

    def mark_routes_for_rebuild(self):
        self.route_rebuilds += 1


def make_builder(enhancers=None) -> FieldSnapshotBuilder:
    return FieldSnapshotBuilder(
        entity_types=FakeEntityTypes(
            kinds={
                "node": EntityKind.FIELDABLE,
                "menu": EntityKind.CONFIG,
                "view": EntityKind.CONFIG,
            },
            export_properties={"view": {"id": "id", "label": "label", "display": "display"}},
        ),
        field_definitions=FakeFieldDefinitions(
            {
                ("node", "article"): {"title": {}, "body": {}},
                ("node", "page"): {"title": {}, "summary": {}},
                ("node", "event"): {"a": {}, "b": {}, "c": {}},
            }
        ),
        enhancers=enhancers,
    )


def make_reconciler(enumerator, gateway, invalidator=None) -> StatusReconciler:
    return StatusReconciler(
        enumerator=enumerator,
        gateway=gateway,
        snapshot_builder=make_builder(),
        invalidator=invalidator or FakeInvalidator(),
    )


def default_override(name: str) -> dict:
    return {"field_name": name, "disabled": False, "public_name": name, "enhancer_id": ""}


# ===========================================================================
# TestFieldSnapshotBuilder  (unit — no DB)
# ===========================================================================

class TestFieldSnapshotBuilder:
    """Unit tests for FieldSnapshotBuilder.  No database access required."""

    def test_fieldable_type_uses_field_definitions(self):
        assert make_builder().field_names_for("node", "article") == ["title", "body"]

    def test_config_type_uses_export_properties(self):
        assert make_builder().field_names_for("view", "frontpage") == ["id", "label", "display"]

    def test_config_type_without_declaration_falls_back(self):
        names = make_builder().field_names_for("menu", "main")
        assert names == list(DEFAULT_CONFIG_PROPERTIES)
        assert set(names) == {"id", "type", "uuid", "_core"}

    def test_unknown_entity_type_has_no_fields(self):
        assert make_builder().field_names_for("path_alias", "path_alias") == []

    def test_fieldable_type_with_unknown_bundle_has_no_fields(self):
        assert make_builder().field_names_for("node", "missing") == []

    def test_build_override_defaults_without_prior_record(self):
        override = make_builder().build_override("title")
        assert override == FieldOverride(
            field_name="title", disabled=False, public_name="title", enhancer_id=""
        )

    def test_build_override_reuses_prior_values(self):
        prior = FakeRecord(
            id="node--article",
            bundle="article",
            resource_type="node--article",
            path="node/article",
            resource_fields={
                "title": {
                    "field_name": "title",
                    "disabled": True,
                    "public_name": "headline",
                    "enhancer_id": "date_time",
                },
            },
        )
        builder = make_builder(enhancers=EnhancerRegistry(["date_time"]))
        override = builder.build_override("title", prior)
        assert override.disabled is True
        assert override.public_name == "headline"
        assert override.enhancer_id == "date_time"
        # Fields missing from the prior record still get defaults.
        assert builder.build_override("body", prior) == FieldOverride(field_name="body")

    def test_build_override_empty_public_name_falls_back_to_field_name(self):
        prior = FakeRecord(
            id="node--article",
            bundle="article",
            resource_type="node--article",
            path="node/article",
            resource_fields={"title": {"field_name": "title", "disabled": False, "public_name": ""}},
        )
        assert make_builder().build_override("title", prior).public_name == "title"

    def test_build_override_normalises_sparse_stored_override(self):
        prior = FakeRecord(
            id="node--article",
            bundle="article",
            resource_type="node--article",
            path="node/article",
            resource_fields={"headline": {"field_name": "title", "disabled": 1, "enhancer_id": None}},
        )
        override = make_builder().build_override("title", prior)
        assert override == FieldOverride(
            field_name="title", disabled=True, public_name="title", enhancer_id=""
        )
        assert override.to_dict() == {**default_override("title"), "disabled": True}

    def test_build_override_unknown_enhancer_raises(self):
        prior = FakeRecord(
            id="node--article",
            bundle="article",
            resource_type="node--article",
            path="node/article",
            resource_fields={"title": {"field_name": "title", "enhancer_id": "no_such_plugin"}},
        )
        builder = make_builder(enhancers=EnhancerRegistry(["date_time"]))
        with pytest.raises(PluginError):
            builder.build_override("title", prior)

    def test_build_resource_fields_one_entry_per_field(self):
        fields = make_builder().build_resource_fields("node", "event")
        assert set(fields) == {"a", "b", "c"}
        for name, override in fields.items():
            assert override == default_override(name)

    def test_field_override_round_trips_through_dict(self):
        override = FieldOverride(field_name="body", disabled=True, enhancer_id="nested")
        assert FieldOverride.from_dict(override.to_dict()) == override


# ===========================================================================
# TestStatusReconciler  (unit — no DB)
# ===========================================================================

class TestStatusReconciler:
    """Unit tests for StatusReconciler using in-memory collaborators."""

    PAIRS = [("node", "article"), ("node", "page"), ("menu", "main"), ("path_alias", "path_alias")]

    def test_descriptor_derived_values(self):
        descriptor = ResourceDescriptor(entity_type_id="node", bundle="article")
        assert descriptor.resource_config_id == "node--article"
        assert descriptor.path == "node/article"

    def test_disable_all_marks_every_record_disabled(self):
        gateway = FakeGateway()
        make_reconciler(FakeEnumerator(*self.PAIRS), gateway).reconcile_all(enable=False)
        assert len(gateway.records) == len(self.PAIRS)
        assert all(record.disabled is True for record in gateway.records.values())

    def test_enable_all_marks_every_record_enabled(self):
        existing = FakeRecord(
            id="node--page", bundle="page", resource_type="node--page",
            path="node/page", disabled=True,
        )
        gateway = FakeGateway([existing])
        make_reconciler(FakeEnumerator(*self.PAIRS), gateway).reconcile_all(enable=True)
        assert all(record.disabled is False for record in gateway.records.values())

    def test_new_record_for_article_scenario(self):
        gateway = FakeGateway()
        make_reconciler(FakeEnumerator(("node", "article")), gateway).reconcile_all(enable=True)

        record = gateway.records["node--article"]
        assert record.id == "node--article"
        assert record.resource_type == "node--article"
        assert record.bundle == "article"
        assert record.path == "node/article"
        assert record.disabled is False
        assert record.resource_fields == {
            "title": default_override("title"),
            "body": default_override("body"),
        }

    def test_new_record_for_config_type_without_declaration(self):
        gateway = FakeGateway()
        make_reconciler(FakeEnumerator(("menu", "main")), gateway).reconcile_all(enable=False)
        assert set(gateway.records["menu--main"].resource_fields) == {"id", "type", "uuid", "_core"}

    def test_existing_record_keeps_field_overrides(self):
        custom_fields = {
            "title": {
                "field_name": "title",
                "disabled": True,
                "public_name": "Title",
                "enhancer_id": "x",
            }
        }
        existing = FakeRecord(
            id="node--article", bundle="article", resource_type="node--article",
            path="node/article", disabled=False, resource_fields=copy.deepcopy(custom_fields),
        )
        gateway = FakeGateway([existing])
        make_reconciler(FakeEnumerator(("node", "article")), gateway).reconcile_all(enable=False)

        record = gateway.records["node--article"]
        assert record.disabled is True
        assert record.resource_fields == custom_fields

    def test_reconcile_twice_is_idempotent(self):
        gateway = FakeGateway()
        reconciler = make_reconciler(FakeEnumerator(*self.PAIRS), gateway)

        reconciler.reconcile_all(enable=False)
        snapshot = {rid: copy.deepcopy(r.resource_fields) for rid, r in gateway.records.items()}
        second = reconciler.reconcile_all(enable=False)

        assert second.created == []
        assert len(second.updated) == len(self.PAIRS)
        for rid, record in gateway.records.items():
            assert record.disabled is True
            assert record.resource_fields == snapshot[rid]

    def test_result_lists_created_and_updated_ids(self):
        existing = FakeRecord(
            id="node--page", bundle="page", resource_type="node--page", path="node/page",
        )
        gateway = FakeGateway([existing])
        result = make_reconciler(FakeEnumerator(*self.PAIRS), gateway).reconcile_all(enable=True)
        assert result.enabled is True
        assert result.updated == ["node--page"]
        assert result.created == ["node--article", "menu--main", "path_alias--path_alias"]
        assert result.total == 4

    def test_invalidator_signalled_once_per_batch(self):
        invalidator = FakeInvalidator()
        make_reconciler(
            FakeEnumerator(*self.PAIRS), FakeGateway(), invalidator
        ).reconcile_all(enable=False)
        assert invalidator.cache_resets == 1
        assert invalidator.route_rebuilds == 1

    def test_storage_failure_propagates_without_rollback(self):
        gateway = FakeGateway(fail_on="node--page")
        invalidator = FakeInvalidator()
        reconciler = make_reconciler(FakeEnumerator(*self.PAIRS), gateway, invalidator)

        with pytest.raises(StorageError):
            reconciler.reconcile_all(enable=False)

        # Earlier resources stay saved, later ones are never reached.
        assert gateway.saved == ["node--article"]
        assert "menu--main" not in gateway.records
        assert invalidator.cache_resets == 0
        assert invalidator.route_rebuilds == 0


# ===========================================================================
# Fixtures  (DB)
# ===========================================================================

@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def registry(db):
    """
    Entity registry with one resource per entity kind:

    - node/article  – fieldable; base field ``title`` + bundle field ``body``
    - node/page     – fieldable; base field ``title`` only
    - menu/main     – config entity without an export declaration
    - view/frontpage – config entity exporting ``id`` and ``label``
    - path_alias/path_alias – neither
    """
    node = EntityType.objects.create(id="node", label="Content", kind=EntityType.Kind.FIELDABLE)
    article = Bundle.objects.create(entity_type=node, name="article", label="Article")
    Bundle.objects.create(entity_type=node, name="page", label="Basic page")
    FieldDefinition.objects.create(entity_type=node, field_name="title", weight=0)
    FieldDefinition.objects.create(entity_type=node, bundle=article, field_name="body", weight=-5)

    menu = EntityType.objects.create(id="menu", label="Menu", kind=EntityType.Kind.CONFIG)
    Bundle.objects.create(entity_type=menu, name="main")

    view = EntityType.objects.create(
        id="view",
        label="View",
        kind=EntityType.Kind.CONFIG,
        properties_to_export={"id": "id", "label": "label"},
    )
    Bundle.objects.create(entity_type=view, name="frontpage")

    alias = EntityType.objects.create(id="path_alias", label="URL alias", kind=EntityType.Kind.OTHER)
    Bundle.objects.create(entity_type=alias, name="path_alias")


ALL_CONFIG_IDS = {
    "menu--main",
    "node--article",
    "node--page",
    "path_alias--path_alias",
    "view--frontpage",
}


# ===========================================================================
# TestEntityRegistry  (integration — DB)
# ===========================================================================

@pytest.mark.django_db
class TestEntityRegistry:

    def test_base_fields_precede_bundle_fields(self, registry):
        definitions = entity_registry.get_field_definitions("node", "article")
        assert list(definitions) == ["title", "body"]
        assert definitions["title"]["base"] is True
        assert definitions["body"]["base"] is False

    def test_unknown_bundle_yields_base_fields(self, registry):
        assert list(entity_registry.get_field_definitions("node", "missing")) == ["title"]

    def test_unknown_entity_type_yields_nothing(self, registry):
        assert entity_registry.get_field_definitions("ghost", "ghost") == {}

    def test_list_bundles_ordered(self, registry):
        pairs = [(b.entity_type_id, b.name) for b in entity_registry.list_bundles()]
        assert pairs == [
            ("menu", "main"),
            ("node", "article"),
            ("node", "page"),
            ("path_alias", "path_alias"),
            ("view", "frontpage"),
        ]

    def test_model_registry_classifies_entity_types(self, registry):
        types = ModelEntityTypeRegistry()
        assert types.get_kind("node") is EntityKind.FIELDABLE
        assert types.get_kind("menu") is EntityKind.CONFIG
        assert types.get_kind("path_alias") is EntityKind.OTHER
        assert types.get_kind("ghost") is EntityKind.OTHER
        assert types.get_properties_to_export("menu") is None
        assert types.get_properties_to_export("view") == {"id": "id", "label": "label"}

    def test_unknown_kind_value_treated_as_other(self, registry):
        EntityType.objects.filter(pk="menu").update(kind="legacy")
        assert ModelEntityTypeRegistry().get_kind("menu") is EntityKind.OTHER

        bulk_ops.disable_all_resources()
        assert ResourceConfig.objects.get(pk="menu--main").resource_fields == {}


# ===========================================================================
# TestORMResourceConfigGateway  (integration — DB)
# ===========================================================================

@pytest.mark.django_db
class TestORMResourceConfigGateway:

    def test_load_missing_returns_none(self):
        assert ORMResourceConfigGateway().load("node--article") is None

    def test_create_does_not_persist_until_saved(self):
        gateway = ORMResourceConfigGateway()
        record = gateway.create(
            id="node--article", bundle="article", resource_type="node--article",
            path="node/article", disabled=True, resource_fields={},
        )
        assert not ResourceConfig.objects.exists()
        gateway.save(record)
        assert gateway.load("node--article").disabled is True

    def test_database_error_on_save_becomes_storage_error(self):
        gateway = ORMResourceConfigGateway()
        record = gateway.create(
            id="node--article", bundle="article", resource_type="node--article",
            path="node/article",
        )
        with mock.patch.object(ResourceConfig, "save", side_effect=DatabaseError("disk full")):
            with pytest.raises(StorageError) as exc_info:
                gateway.save(record)
        assert "node--article" in exc_info.value.detail

    def test_database_error_on_load_becomes_storage_error(self):
        gateway = ORMResourceConfigGateway()
        with mock.patch.object(
            ResourceConfig.objects, "filter", side_effect=DatabaseError("connection refused")
        ):
            with pytest.raises(StorageError) as exc_info:
                gateway.load("node--article")
        assert "node--article" in exc_info.value.detail


# ===========================================================================
# TestBulkOperations  (integration — DB)
# ===========================================================================

@pytest.mark.django_db
class TestBulkOperations:

    def test_disable_all_creates_every_config(self, registry):
        result, message = bulk_ops.disable_all_resources()

        assert message == bulk_ops.DISABLED_MESSAGE
        assert set(result.created) == ALL_CONFIG_IDS
        configs = ResourceConfig.objects.in_bulk()
        assert set(configs) == ALL_CONFIG_IDS
        assert all(config.disabled for config in configs.values())

    def test_created_configs_seed_field_overrides_per_kind(self, registry):
        bulk_ops.enable_all_resources()
        configs = ResourceConfig.objects.in_bulk()

        article = configs["node--article"]
        assert article.path == "node/article"
        assert article.resource_type == "node--article"
        assert article.resource_fields == {
            "title": default_override("title"),
            "body": default_override("body"),
        }
        assert set(configs["node--page"].resource_fields) == {"title"}
        assert set(configs["menu--main"].resource_fields) == {"id", "type", "uuid", "_core"}
        assert set(configs["view--frontpage"].resource_fields) == {"id", "label"}
        assert configs["path_alias--path_alias"].resource_fields == {}

    def test_toggle_preserves_existing_overrides(self, registry):
        custom_fields = {
            "title": {
                "field_name": "title",
                "disabled": True,
                "public_name": "Title",
                "enhancer_id": "x",
            }
        }
        ResourceConfig.objects.create(
            id="node--article", bundle="article", resource_type="node--article",
            path="node/article", disabled=False, resource_fields=custom_fields,
        )

        result, _ = bulk_ops.disable_all_resources()
        assert result.updated == ["node--article"]

        config = ResourceConfig.objects.get(pk="node--article")
        assert config.disabled is True
        assert config.resource_fields == custom_fields

        bulk_ops.enable_all_resources()
        config.refresh_from_db()
        assert config.disabled is False
        assert config.resource_fields == custom_fields

    def test_storage_failure_aborts_remaining_batch(self, registry):
        original_save = ResourceConfig.save

        def failing_save(self, *args, **kwargs):
            if self.pk == "node--page":
                raise DatabaseError("connection lost")
            return original_save(self, *args, **kwargs)

        with mock.patch.object(ResourceConfig, "save", failing_save):
            with pytest.raises(StorageError):
                bulk_ops.disable_all_resources()

        assert set(ResourceConfig.objects.values_list("id", flat=True)) == {
            "menu--main",
            "node--article",
        }

    def test_resource_type_cache_refreshed_after_toggle(self, registry):
        before = {entry["resource_type"]: entry for entry in bulk_ops.get_resource_types()}
        assert before["node--article"]["disabled"] is False
        assert before["node--article"]["configured"] is False

        bulk_ops.disable_all_resources()

        after = {entry["resource_type"]: entry for entry in bulk_ops.get_resource_types()}
        assert set(after) == ALL_CONFIG_IDS
        assert all(entry["disabled"] and entry["configured"] for entry in after.values())

    def test_failed_batch_still_refreshes_saved_rows(self, registry):
        bulk_ops.get_resource_types()
        original_save = ResourceConfig.save

        def failing_save(self, *args, **kwargs):
            if self.pk == "node--page":
                raise DatabaseError("connection lost")
            return original_save(self, *args, **kwargs)

        with mock.patch.object(ResourceConfig, "save", failing_save):
            with pytest.raises(StorageError):
                bulk_ops.disable_all_resources()

        listing = {entry["resource_type"]: entry for entry in bulk_ops.get_resource_types()}
        assert listing["node--article"]["disabled"] is True
        assert listing["node--page"]["configured"] is False

    def test_new_bundle_appears_in_cached_listing(self, registry):
        assert "node--event" not in {e["resource_type"] for e in bulk_ops.get_resource_types()}

        Bundle.objects.create(entity_type_id="node", name="event", label="Event")

        assert "node--event" in {e["resource_type"] for e in bulk_ops.get_resource_types()}

    def test_deleted_entity_type_leaves_cached_listing(self, registry):
        bulk_ops.get_resource_types()
        EntityType.objects.filter(pk="path_alias").delete()
        listing = {e["resource_type"] for e in bulk_ops.get_resource_types()}
        assert "path_alias--path_alias" not in listing


# ===========================================================================
# TestAPIEndpoints  (integration — DB)
# ===========================================================================

DISABLE_URL = "/api/v1/resources/bulk/disable/"
ENABLE_URL = "/api/v1/resources/bulk/enable/"
RESOURCES_URL = "/api/v1/resources/"
CONFIGS_URL = "/api/v1/resource-configs/"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def staff_client(admin_user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.mark.django_db
class TestAPIEndpoints:

    def test_bulk_disable_requires_staff(self, api_client, registry):
        resp = api_client.post(DISABLE_URL)
        assert resp.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
        assert not ResourceConfig.objects.exists()

    def test_bulk_disable_200(self, staff_client, registry):
        resp = staff_client.post(DISABLE_URL)
        assert resp.status_code == status.HTTP_200_OK
        body = resp.json()
        assert body["detail"] == "All resources successfully disabled."
        assert body["created"] == len(ALL_CONFIG_IDS)
        assert body["updated"] == 0

    def test_bulk_enable_after_disable_updates(self, staff_client, registry):
        staff_client.post(DISABLE_URL)
        resp = staff_client.post(ENABLE_URL)
        assert resp.status_code == status.HTTP_200_OK
        body = resp.json()
        assert body["detail"] == "All resources successfully enabled."
        assert body["created"] == 0
        assert body["updated"] == len(ALL_CONFIG_IDS)
        assert not ResourceConfig.objects.filter(disabled=True).exists()

    def test_bulk_storage_error_returns_503(self, staff_client, registry):
        with mock.patch.object(ResourceConfig, "save", side_effect=DatabaseError("down")):
            resp = staff_client.post(DISABLE_URL)
        assert resp.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert resp.json()["code"] == "storage_error"

    def test_resource_type_listing(self, api_client, registry):
        resp = api_client.get(RESOURCES_URL)
        assert resp.status_code == status.HTTP_200_OK
        listing = {entry["resource_type"]: entry for entry in resp.json()}
        assert set(listing) == ALL_CONFIG_IDS
        assert listing["view--frontpage"]["path"] == "view/frontpage"

    def test_resource_config_detail_404_then_200(self, api_client, staff_client, registry):
        assert api_client.get(f"{CONFIGS_URL}node--article/").status_code == status.HTTP_404_NOT_FOUND

        staff_client.post(DISABLE_URL)

        resp = api_client.get(f"{CONFIGS_URL}node--article/")
        assert resp.status_code == status.HTTP_200_OK
        body = resp.json()
        assert body["disabled"] is True
        assert set(body["resource_fields"]) == {"title", "body"}

    def test_resource_config_list_filter(self, api_client, registry):
        ResourceConfig.objects.create(
            id="node--page", bundle="page", resource_type="node--page",
            path="node/page", disabled=True,
        )
        ResourceConfig.objects.create(
            id="node--article", bundle="article", resource_type="node--article",
            path="node/article", disabled=False,
        )
        resp = api_client.get(f"{CONFIGS_URL}?disabled=true")
        assert resp.status_code == status.HTTP_200_OK
        assert [entry["id"] for entry in resp.json()] == ["node--page"]

    def test_health_check(self, api_client, db):
        resp = api_client.get("/health/", HTTP_X_REQUEST_ID="req-123")
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json() == {"status": "ok", "db": "ok", "cache": "ok"}
        assert resp["X-Request-ID"] == "req-123"


# ===========================================================================
# TestAdminBulkPage  (integration — DB)
# ===========================================================================

@pytest.mark.django_db
class TestAdminBulkPage:

    @property
    def url(self) -> str:
        return reverse("admin:resource_config_resourceconfig_bulk")

    def test_page_renders_both_buttons(self, admin_client, registry):
        resp = admin_client.get(self.url)
        assert resp.status_code == 200
        content = resp.content.decode()
        assert "Disable all resources" in content
        assert "Enable all resources" in content

    def test_disable_redirects_with_message(self, admin_client, registry):
        resp = admin_client.post(self.url, {"operation": "disable"}, follow=True)
        assert resp.redirect_chain[-1][0] == reverse(
            "admin:resource_config_resourceconfig_changelist"
        )
        messages = [str(m) for m in resp.context["messages"]]
        assert "All resources successfully disabled." in messages
        assert ResourceConfig.objects.filter(disabled=True).count() == len(ALL_CONFIG_IDS)

    def test_enable_sets_every_resource_enabled(self, admin_client, registry):
        bulk_ops.disable_all_resources()
        admin_client.post(self.url, {"operation": "enable"})
        assert not ResourceConfig.objects.filter(disabled=True).exists()

    def test_unknown_operation_rerenders_form(self, admin_client, registry):
        resp = admin_client.post(self.url, {"operation": "delete"})
        assert resp.status_code == 200
        assert not ResourceConfig.objects.exists()

    def test_anonymous_user_redirected_to_login(self, client, registry):
        resp = client.get(self.url)
        assert resp.status_code == 302
        assert "/admin/login/" in resp["Location"]

    def test_change_form_edit_refreshes_listing(self, admin_client, registry):
        bulk_ops.enable_all_resources()
        before = {e["resource_type"]: e for e in bulk_ops.get_resource_types()}
        assert before["node--article"]["disabled"] is False

        config = ResourceConfig.objects.get(pk="node--article")
        url = reverse("admin:resource_config_resourceconfig_change", args=[config.pk])
        resp = admin_client.post(
            url,
            {
                "bundle": config.bundle,
                "path": config.path,
                "disabled": "on",
                "resource_fields": json.dumps(config.resource_fields),
            },
        )
        assert resp.status_code == 302

        after = {e["resource_type"]: e for e in bulk_ops.get_resource_types()}
        assert after["node--article"]["disabled"] is True
        assert after["node--page"]["disabled"] is False
