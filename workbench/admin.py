"""
Workbench Admin: Django admin for WorkItem, Employee and CalendarEntry.

WorkItem uses SimpleHistoryAdmin so schedule/release changes can be
browsed from the change form.
"""

from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from workbench.models import CalendarEntry, Employee, WorkItem


# ── WorkItem ──


@admin.register(WorkItem)
class WorkItemAdmin(SimpleHistoryAdmin):
    """Admin for schedulable work items."""

    list_display = (
        "reference",
        "client_name",
        "vehicle_model",
        "status",
        "priority",
        "start_date",
        "end_date",
    )
    list_filter = ("status", "requires_materials", "requires_design")
    search_fields = ("reference", "client_name", "vehicle_model")
    date_hierarchy = "start_date"
    readonly_fields = ("uuid", "created_at", "updated_at")


# ── Employee ──


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    """Admin for the workforce roster."""

    list_display = ("name", "role", "weekly_hours", "is_active")
    list_filter = ("role", "is_active")
    search_fields = ("name",)


# ── CalendarEntry ──


@admin.register(CalendarEntry)
class CalendarEntryAdmin(admin.ModelAdmin):
    """Admin for manual calendar entries."""

    list_display = ("date", "time", "title", "category", "event_type", "created_by")
    list_filter = ("category", "event_type")
    search_fields = ("title", "description")
    date_hierarchy = "date"
    readonly_fields = ("created_by", "created_at", "updated_at")
