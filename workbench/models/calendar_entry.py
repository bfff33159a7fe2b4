"""
CalendarEntry model.

Manually created calendar rows (vehicle receptions, meetings, reminders,
notes). Derived events from production, purchasing and quoting are never
stored here; they are rebuilt from their source records on every read.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from workbench.protocols.calendar import EVENT_TYPES_BY_CATEGORY, EventCategory, EventType


class CalendarEntry(models.Model):
    """Manual calendar event."""

    title = models.CharField(max_length=200, verbose_name=_("Title"))
    description = models.TextField(blank=True, verbose_name=_("Description"))

    date = models.DateField(db_index=True, verbose_name=_("Date"))
    end_date = models.DateField(
        null=True,
        blank=True,
        verbose_name=_("End date"),
        help_text=_("Only for events spanning several days"),
    )
    time = models.TimeField(null=True, blank=True, verbose_name=_("Time"))

    category = models.CharField(
        max_length=20,
        choices=EventCategory.choices,
        default=EventCategory.GENERAL,
        verbose_name=_("Category"),
    )
    event_type = models.CharField(
        max_length=30,
        choices=EventType.choices,
        default=EventType.NOTE,
        verbose_name=_("Event type"),
    )
    source_id = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_("Source record"),
        help_text=_("ID of a related record (lead, project...), when applicable"),
    )

    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_("Metadata"),
        help_text=_("client_name, vehicle_model, plate, project_number, lead_id..."),
    )
    visible_roles = models.JSONField(
        default=list,
        verbose_name=_("Visible to roles"),
    )

    created_by = models.CharField(max_length=255, blank=True, verbose_name=_("Created by"))
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("Updated at"))

    class Meta:
        db_table = "workbench_calendar_entry"
        verbose_name = _("Calendar entry")
        verbose_name_plural = _("Calendar entries")
        ordering = ["date", "time"]

    def __str__(self) -> str:
        return f"{self.date:%d/%m/%y} {self.title}"

    def clean(self):
        errors = {}
        if not (self.title or "").strip():
            errors["title"] = _("Title is required.")
        if not self.date:
            errors["date"] = _("Date is required.")
        roles = self.visible_roles
        if not isinstance(roles, list) or any(
            not isinstance(role, str) or not role.strip() for role in roles
        ):
            errors["visible_roles"] = _("Visible roles must be a list of role names.")
        elif not roles:
            errors["visible_roles"] = _("At least one role must be able to see the event.")
        allowed = EVENT_TYPES_BY_CATEGORY.get(self.category)
        if allowed is not None and self.event_type not in allowed:
            errors["event_type"] = _("This event type does not belong to the category.")
        if self.date and self.end_date and self.end_date < self.date:
            errors["end_date"] = _("End date cannot be before the start date.")
        if errors:
            raise ValidationError(errors)
