"""
apps.entity_registry.admin
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Django admin registrations for the entity registry.
"""
from django.contrib import admin

from .models import Bundle, EntityType, FieldDefinition


class BundleInline(admin.TabularInline):
    model = Bundle
    extra = 0


@admin.register(EntityType)
class EntityTypeAdmin(admin.ModelAdmin):
    list_display = ["id", "label", "kind"]
    list_filter = ["kind"]
    search_fields = ["id", "label"]
    inlines = [BundleInline]


@admin.register(FieldDefinition)
class FieldDefinitionAdmin(admin.ModelAdmin):
    list_display = ["field_name", "entity_type", "bundle", "field_type", "weight"]
    list_filter = ["entity_type"]
    search_fields = ["field_name", "label"]
    ordering = ["entity_type", "weight", "field_name"]
