import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

"""
Admin helpers for draftable models.
"""


class DraftStatusListFilter(admin.SimpleListFilter):
    """Sidebar filter on the derived publish state."""

    title = _("status")
    parameter_name = "status"

    def lookups(self, request, model_admin):  # noqa: C901
        return (
            ("published", _("Published")),
            ("scheduled", _("Scheduled")),
            ("draft", _("Draft")),
        )

    def queryset(self, request, queryset):  # noqa: C901
        if self.value() == "published":
            return queryset.published()
        if self.value() == "scheduled":
            return queryset.scheduled()
        if self.value() == "draft":
            return queryset.drafts()
        return queryset


class DraftableAdminMixin:
    """
    ModelAdmin mixin for draftable models.

    The changelist shows drafts alongside published records, and the bulk
    actions go through each record's ``publish()`` / ``draft()`` so that
    ``save()`` overrides still run.
    """

    actions = ["publish_selected", "draft_selected"]

    def get_queryset(self, request):  # noqa: C901
        """Include drafts, which the default manager hides."""
        qs = self.model._default_manager.with_drafts()
        ordering = self.get_ordering(request)
        if ordering:
            qs = qs.order_by(*ordering)
        return qs

    def get_list_display(self, request):  # noqa: C901
        list_display = tuple(super().get_list_display(request))
        if "published_status" not in list_display:
            list_display += ("published_status",)
        return list_display

    def get_list_filter(self, request):  # noqa: C901
        list_filter = tuple(super().get_list_filter(request))
        if DraftStatusListFilter not in list_filter:
            list_filter = (DraftStatusListFilter,) + list_filter
        return list_filter

    @admin.display(boolean=True, description=_("Published"))
    def published_status(self, obj):
        return obj.is_published()

    @admin.action(description=_("Publish selected records"))
    def publish_selected(self, request, queryset):
        count = 0
        for obj in queryset:
            obj.publish()
            count += 1

        logger.info("Published %d %s records", count, self.model._meta.label)
        self.message_user(request, f"{count} records were published.")

    @admin.action(description=_("Move selected records to draft"))
    def draft_selected(self, request, queryset):
        count = 0
        for obj in queryset:
            obj.draft()
            count += 1

        logger.info("Moved %d %s records to draft", count, self.model._meta.label)
        self.message_user(request, f"{count} records were set to draft.")
