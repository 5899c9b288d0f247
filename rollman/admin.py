"""
Rollman Admin.

- Roll: measures and timestamps are read-only; rolls are never removed,
  only marked as deleted through the Rolls service.
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from rollman.exceptions import RollError
from rollman.models import Roll

logger = logging.getLogger(__name__)


class OnStockFilter(admin.SimpleListFilter):
    """Split rolls by deletion state."""

    title = _('On stock')
    parameter_name = 'on_stock'

    def lookups(self, request, model_admin):
        return [
            ('yes', _('On stock')),
            ('no', _('Deleted')),
        ]

    def queryset(self, request, queryset):
        if self.value() == 'yes':
            return queryset.on_stock()
        if self.value() == 'no':
            return queryset.deleted()
        return queryset


@admin.register(Roll)
class RollAdmin(admin.ModelAdmin):
    """Roll admin: read-only with "mark as deleted" action."""

    list_display = ['id', 'length', 'weight', 'added_at', 'deleted_at', 'on_stock_display']
    list_filter = [OnStockFilter, 'added_at']
    search_fields = ['id']
    readonly_fields = ['length', 'weight', 'added_at', 'deleted_at']
    date_hierarchy = 'added_at'
    actions = ['mark_deleted']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('On stock?'), boolean=True)
    def on_stock_display(self, obj):
        return not obj.is_deleted

    @admin.action(description=_('Mark selected rolls as deleted'))
    def mark_deleted(self, request, queryset):
        from rollman import rolls

        count = 0
        for roll in queryset.on_stock():
            try:
                rolls.delete(roll.pk)
                count += 1
            except RollError as exc:
                logger.warning("mark_deleted: failed to delete roll %s: %s", roll.pk, exc)

        self.message_user(request, _('{count} roll(s) marked as deleted.').format(count=count))
