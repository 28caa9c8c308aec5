"""
apps.resource_config.admin
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Django admin registration for ResourceConfig, plus the bulk operations page
at ``admin/resource_config/resourceconfig/bulk/``.
"""
from django.contrib import admin, messages
from django.core.exceptions import PermissionDenied
from django.http import HttpResponseRedirect
from django.template.response import TemplateResponse
from django.urls import path, reverse

from .forms import BulkOperationsForm
from .models import ResourceConfig


@admin.register(ResourceConfig)
class ResourceConfigAdmin(admin.ModelAdmin):
    """
    Admin interface for resource configurations.

    Individual records can still be edited by hand; the bulk page toggles
    every resource at once and never touches existing field overrides.
    """

    list_display = ["id", "path", "disabled", "updated_at"]
    list_filter = ["disabled"]
    search_fields = ["id", "path", "bundle"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["id"]

    def get_readonly_fields(self, request, obj=None):
        """The id and resource type of a stored configuration never change."""
        if obj is not None:
            return ["id", "resource_type"] + list(self.readonly_fields)
        return self.readonly_fields

    def get_urls(self):
        opts = self.model._meta
        custom_urls = [
            path(
                "bulk/",
                self.admin_site.admin_view(self.bulk_operations_view),
                name=f"{opts.app_label}_{opts.model_name}_bulk",
            ),
        ]
        return custom_urls + super().get_urls()

    def bulk_operations_view(self, request):
        if not self.has_change_permission(request):
            raise PermissionDenied

        form = BulkOperationsForm(request.POST or None)
        if request.method == "POST" and form.is_valid():
            self.message_user(request, form.submit(), level=messages.SUCCESS)
            opts = self.model._meta
            return HttpResponseRedirect(
                reverse(f"admin:{opts.app_label}_{opts.model_name}_changelist")
            )

        context = {
            **self.admin_site.each_context(request),
            "opts": self.model._meta,
            "title": "JSON:API bulk operations",
            "form": form,
        }
        return TemplateResponse(
            request,
            "admin/resource_config/bulk_operations.html",
            context,
        )
