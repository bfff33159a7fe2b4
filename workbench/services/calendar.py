"""
Unified calendar.

Merges the events of every registered source into one date-ordered list,
and filters it by role, category and day. Manual entries are the only
events stored by the workbench itself; their CRUD goes through here so the
caller always gets the freshly merged list back.

Usage:
    aggregator = CalendarAggregator()
    events = aggregator.get_all_events()
    mine = CalendarAggregator.filter_by_role(events, "operator")
    today = CalendarAggregator.events_for_day(mine, "2024-03-04")
"""

import logging
from collections import Counter
from typing import Any, Iterable

from django.db import transaction

from workbench.conf import get_event_sources, roles_for_category
from workbench.protocols.calendar import (
    EVENT_TYPES_BY_CATEGORY,
    CalendarEvent,
    EventCategory,
    default_event_type,
)
from workbench.signals import calendar_entry_changed

logger = logging.getLogger(__name__)


ENTRY_FIELDS = (
    "title",
    "description",
    "date",
    "end_date",
    "time",
    "category",
    "event_type",
    "source_id",
    "metadata",
    "visible_roles",
)


class CalendarAggregator:
    """Merge, filter and edit calendar events across all sources."""

    def __init__(self, sources: Iterable | None = None):
        self.sources = list(sources) if sources is not None else get_event_sources()

    # ── Aggregation ──

    def _collect(self, source) -> list[CalendarEvent]:
        events = []
        for record in source.fetch():
            event = source.transform(record)
            if event is not None:
                events.append(event)
        return events

    def get_all_events(self) -> list[CalendarEvent]:
        """
        Every source's events, ascending by date.

        A source that raises is logged and contributes nothing; the others
        are still returned. The sort is stable, so events sharing a date keep
        registry order.
        """
        events: list[CalendarEvent] = []
        for source in self.sources:
            name = getattr(source, "name", type(source).__name__)
            try:
                events.extend(self._collect(source))
            except Exception:
                logger.exception(
                    f"Calendar source {name} failed, skipping",
                    extra={"source": name},
                )

        events.sort(key=lambda event: event.date)
        return events

    # ── Filters ──

    @staticmethod
    def filter_by_role(events: Iterable[CalendarEvent], role: str) -> list[CalendarEvent]:
        return [event for event in events if role in event.visible_roles]

    @staticmethod
    def filter_by_category(
        events: Iterable[CalendarEvent], categories: Iterable[str] | None
    ) -> list[CalendarEvent]:
        """Events in any of `categories`; no categories means no filter."""
        wanted = {str(category) for category in categories or ()}
        if not wanted:
            return list(events)
        return [event for event in events if event.category in wanted]

    @staticmethod
    def events_for_day(events: Iterable[CalendarEvent], day: str) -> list[CalendarEvent]:
        """Single-day events dated `day`, plus spans covering it (inclusive)."""
        return [event for event in events if event.touches(day)]

    @staticmethod
    def events_between(
        events: Iterable[CalendarEvent], start: str, end: str
    ) -> list[CalendarEvent]:
        """Events touching any day of [start, end]."""
        return [
            event
            for event in events
            if event.date <= end and (event.end_date or event.date) >= start
        ]

    @staticmethod
    def count_by_category(events: Iterable[CalendarEvent]) -> dict[str, int]:
        counter = Counter(event.category for event in events)
        counts = {"total": sum(counter.values())}
        for category in EventCategory.values:
            counts[category] = counter.get(category, 0)
        return counts

    # ── Manual entries ──

    def create_event(self, data: dict[str, Any], created_by: str | None = None) -> list[CalendarEvent]:
        """
        Store a manual entry and return the merged event list.

        Visible roles and the event type default from the category when
        omitted. An explicitly empty role list is kept and rejected by
        validation.

        Raises:
            ValidationError: Blank title, missing date, missing or malformed
                visible roles, an event type outside the category or an end
                date before the start date
        """
        from workbench.models import CalendarEntry

        values = {key: value for key, value in data.items() if key in ENTRY_FIELDS}
        values.setdefault("category", EventCategory.GENERAL)
        if values.get("visible_roles") is None:
            values["visible_roles"] = roles_for_category(values["category"])
        if not values.get("event_type"):
            values["event_type"] = default_event_type(values["category"])

        entry = CalendarEntry(created_by=created_by or "", **values)

        with transaction.atomic():
            entry.full_clean()
            entry.save()

        logger.info(
            f"Calendar entry {entry.pk} created: {entry.title}",
            extra={"calendar_entry": entry.pk, "created_by": created_by},
        )
        calendar_entry_changed.send(sender=CalendarEntry, entry_id=entry.pk, action="created")

        return self.get_all_events()

    def update_event(self, pk, data: dict[str, Any]) -> list[CalendarEvent]:
        """
        Apply `data` to a manual entry and return the merged event list.

        When the category changes, roles still equal to the old category's
        defaults follow the new category, and so does an event type that
        does not fit it, unless `data` sets them.

        Raises:
            CalendarEntry.DoesNotExist: Unknown pk
            ValidationError: Same rules as create_event
        """
        from workbench.models import CalendarEntry

        with transaction.atomic():
            entry = CalendarEntry.objects.select_for_update().get(pk=pk)
            previous_category = entry.category
            for key, value in data.items():
                if key in ENTRY_FIELDS:
                    setattr(entry, key, value)
            if entry.category != previous_category:
                self._follow_category(entry, previous_category, data)
            entry.full_clean()
            entry.save()

        logger.info(
            f"Calendar entry {entry.pk} updated",
            extra={"calendar_entry": entry.pk, "fields": sorted(data)},
        )
        calendar_entry_changed.send(sender=CalendarEntry, entry_id=entry.pk, action="updated")

        return self.get_all_events()

    @staticmethod
    def _follow_category(entry, previous_category: str, data: dict[str, Any]) -> None:
        if "visible_roles" not in data and sorted(entry.visible_roles or []) == sorted(
            roles_for_category(previous_category)
        ):
            entry.visible_roles = roles_for_category(entry.category)
        allowed = EVENT_TYPES_BY_CATEGORY.get(entry.category, [])
        if "event_type" not in data and entry.event_type not in allowed:
            entry.event_type = default_event_type(entry.category)

    def delete_event(self, pk) -> list[CalendarEvent]:
        """
        Delete a manual entry and return the merged event list.

        Raises:
            CalendarEntry.DoesNotExist: Unknown pk
        """
        from workbench.models import CalendarEntry

        entry = CalendarEntry.objects.get(pk=pk)
        entry.delete()

        logger.info(f"Calendar entry {pk} deleted", extra={"calendar_entry": pk})
        calendar_entry_changed.send(sender=CalendarEntry, entry_id=pk, action="deleted")

        return self.get_all_events()
