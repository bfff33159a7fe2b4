"""
Calendar protocol: unified event model and event-source interface.

Every record that shows up on the workshop calendar (production spans,
expected deliveries, quote follow-ups, manual notes) is projected onto a
CalendarEvent by an EventSource. New sources only need to implement the
protocol and be listed in WORKBENCH["EVENT_SOURCES"].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol, runtime_checkable

from django.db import models
from django.utils.translation import gettext_lazy as _

from workbench.exceptions import WorkbenchError


class EventCategory(models.TextChoices):
    """Calendar branch an event belongs to."""

    PRODUCTION = "production", _("Production")
    CLIENT_VEHICLE = "client_vehicle", _("Client / vehicles")
    PURCHASING = "purchasing", _("Purchasing")
    QUOTING = "quoting", _("Quotes")
    GENERAL = "general", _("General")


class EventType(models.TextChoices):
    """Sub-label of an event inside its category."""

    # Client / vehicles
    RECEPTION = "reception", _("Vehicle reception")
    DELIVERY = "delivery", _("Vehicle delivery")
    REVIEW = "review", _("Review")
    APPOINTMENT = "appointment", _("Appointment")
    # Production
    PROJECT_START = "project_start", _("Project start")
    PROJECT_END = "project_end", _("Project end")
    PROJECT_SPAN = "project_span", _("Project in production")
    # Purchasing
    EXPECTED_DELIVERY = "expected_delivery", _("Expected order delivery")
    ORDER_FOLLOW_UP = "order_follow_up", _("Order follow-up")
    # Quotes
    QUOTE_FOLLOW_UP = "quote_follow_up", _("Quote follow-up")
    EXPIRY = "expiry", _("Quote expiry")
    # General
    MEETING = "meeting", _("Meeting")
    REMINDER = "reminder", _("Reminder")
    NOTE = "note", _("Note")


EVENT_TYPES_BY_CATEGORY = {
    EventCategory.CLIENT_VEHICLE: [
        EventType.RECEPTION,
        EventType.DELIVERY,
        EventType.REVIEW,
        EventType.APPOINTMENT,
    ],
    EventCategory.PRODUCTION: [
        EventType.PROJECT_START,
        EventType.PROJECT_END,
        EventType.PROJECT_SPAN,
    ],
    EventCategory.PURCHASING: [
        EventType.EXPECTED_DELIVERY,
        EventType.ORDER_FOLLOW_UP,
    ],
    EventCategory.QUOTING: [
        EventType.QUOTE_FOLLOW_UP,
        EventType.EXPIRY,
    ],
    EventCategory.GENERAL: [
        EventType.MEETING,
        EventType.REMINDER,
        EventType.NOTE,
    ],
}


def default_event_type(category: str) -> str:
    """First event type of `category`; note for unknown categories."""
    return EVENT_TYPES_BY_CATEGORY.get(category, [EventType.NOTE])[0]


@dataclass(frozen=True)
class CalendarEvent:
    """
    Read-only projection of one calendar entry.

    Dates are canonical ISO strings (YYYY-MM-DD) so that plain string
    comparison orders them. An event with a distinct end_date is a span.
    """

    id: str
    title: str
    date: str
    category: str
    event_type: str
    visible_roles: frozenset[str]
    description: str | None = None
    end_date: str | None = None
    time: str | None = None
    source_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_by: str | None = None
    created_at: str | None = None

    def __post_init__(self):
        # A bare string would otherwise split into single-letter roles
        if isinstance(self.visible_roles, str):
            raise WorkbenchError(
                "INVALID_VISIBLE_ROLES", event=self.id, roles=self.visible_roles
            )
        members = list(self.visible_roles or ())
        if any(not isinstance(role, str) or not role.strip() for role in members):
            raise WorkbenchError("INVALID_VISIBLE_ROLES", event=self.id, roles=members)
        if not members:
            raise WorkbenchError("EMPTY_VISIBLE_ROLES", event=self.id)
        # Normalise lists/sets coming from JSON rows
        object.__setattr__(self, "visible_roles", frozenset(members))

    @property
    def is_span(self) -> bool:
        return bool(self.end_date) and self.end_date != self.date

    def touches(self, day: str) -> bool:
        """True when the event is shown on `day` (YYYY-MM-DD)."""
        if self.is_span:
            return self.date <= day <= self.end_date
        return self.date == day

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "end_date": self.end_date,
            "time": self.time,
            "category": self.category,
            "event_type": self.event_type,
            "source_id": self.source_id,
            "metadata": self.metadata,
            "visible_roles": sorted(self.visible_roles),
            "created_by": self.created_by,
            "created_at": self.created_at,
        }


@runtime_checkable
class EventSource(Protocol):
    """
    Protocol for a calendar event source.

    fetch() reads the raw records; transform() maps one record to zero or
    one CalendarEvent and must be side-effect free, deriving the event id
    from the record id so repeated aggregation yields identical events.
    """

    name: str

    def fetch(self) -> Iterable[Any]:
        """Return the raw records of this source."""
        ...

    def transform(self, record: Any) -> CalendarEvent | None:
        """Return the event for `record`, or None if it does not qualify."""
        ...
