"""
Calendar event sources.

Each source reads one kind of record and projects it onto CalendarEvent.
The aggregator only sees the EventSource protocol, so sources are added or
removed through WORKBENCH["EVENT_SOURCES"]:

    WORKBENCH = {
        "EVENT_SOURCES": [
            "workbench.adapters.sources.ManualEventSource",
            "workbench.adapters.sources.ProductionEventSource",
            "myshop.calendar.InspectionEventSource",
        ],
    }

Event ids are derived from the record id ("prod-span-<id>", "delivery-<id>",
"follow-up-<id>", "manual-<id>") so the same record always maps to the same
event.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Iterable

from django.utils import timezone

from workbench.conf import (
    get_purchase_backend,
    get_quote_backend,
    get_setting,
    roles_for_category,
)
from workbench.exceptions import WorkbenchError
from workbench.protocols.calendar import CalendarEvent, EventCategory, EventType
from workbench.protocols.records import PurchaseRecord, QuoteRecord

logger = logging.getLogger(__name__)


def iso_day(value: date | datetime | str | None) -> str | None:
    """Canonical YYYY-MM-DD for dates, datetimes and ISO strings."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class BaseEventSource:
    """Shared plumbing: default visible roles from the source category."""

    name = "base"
    category = EventCategory.GENERAL

    @property
    def visible_roles(self) -> list[str]:
        return roles_for_category(self.category)

    def fetch(self) -> Iterable[Any]:
        raise NotImplementedError

    def transform(self, record: Any) -> CalendarEvent | None:
        raise NotImplementedError


# ══════════════════════════════════════════════════════════════
# MANUAL
# ══════════════════════════════════════════════════════════════


class ManualEventSource(BaseEventSource):
    """Rows of workbench.CalendarEntry."""

    name = "manual"

    def fetch(self):
        from workbench.models import CalendarEntry

        return CalendarEntry.objects.order_by("date", "pk")

    def transform(self, entry) -> CalendarEvent | None:
        if not entry.visible_roles:
            logger.warning(
                f"Calendar entry {entry.pk} has no visible roles, skipped",
                extra={"calendar_entry": entry.pk},
            )
            return None

        try:
            return CalendarEvent(
                id=f"manual-{entry.pk}",
                title=entry.title,
                description=entry.description or None,
                date=iso_day(entry.date),
                end_date=iso_day(entry.end_date),
                time=entry.time.strftime("%H:%M") if entry.time else None,
                category=entry.category,
                event_type=entry.event_type or EventType.NOTE,
                source_id=entry.source_id or None,
                metadata=dict(entry.metadata or {}),
                visible_roles=entry.visible_roles,
                created_by=entry.created_by or None,
                created_at=entry.created_at.isoformat() if entry.created_at else None,
            )
        except WorkbenchError as exc:
            logger.warning(
                f"Calendar entry {entry.pk} has invalid visible roles, skipped",
                extra={"calendar_entry": entry.pk, "code": exc.code},
            )
            return None


# ══════════════════════════════════════════════════════════════
# PRODUCTION
# ══════════════════════════════════════════════════════════════


class ProductionEventSource(BaseEventSource):
    """One span event per scheduled or in-progress work item."""

    name = "production"
    category = EventCategory.PRODUCTION

    STATUS_LABELS = {
        "in_progress": "In the shop",
        "scheduled": "Planned",
    }

    def fetch(self):
        from workbench.models import WorkItem

        return WorkItem.objects.committed()

    def transform(self, item) -> CalendarEvent | None:
        if not item.start_date or not item.end_date:
            return None

        title = item.client_name or str(item.reference or item.id)
        if item.vehicle_model:
            title = f"{title} · {item.vehicle_model}"

        parts = [item.reference, self.STATUS_LABELS.get(item.status, "Planned")]
        if item.notes:
            parts.append(item.notes)

        return CalendarEvent(
            id=f"prod-span-{item.id}",
            title=title,
            description=" · ".join(part for part in parts if part),
            date=iso_day(item.start_date),
            end_date=iso_day(item.end_date),
            category=self.category,
            event_type=EventType.PROJECT_SPAN,
            source_id=str(item.id),
            metadata={
                "status": item.status,
                "total_hours": float(item.total_hours or 0),
                "vehicle_model": item.vehicle_model or None,
            },
            visible_roles=frozenset(self.visible_roles),
        )


# ══════════════════════════════════════════════════════════════
# PURCHASING
# ══════════════════════════════════════════════════════════════


class DeliveryEventSource(BaseEventSource):
    """Expected delivery of ordered purchase lines."""

    name = "deliveries"
    category = EventCategory.PURCHASING

    def fetch(self):
        return get_purchase_backend().ordered_items()

    def transform(self, record: PurchaseRecord) -> CalendarEvent | None:
        if str(record.status).lower() != "ordered" or not record.ordered_at:
            return None

        delivery_days = record.delivery_days
        if delivery_days is None:
            delivery_days = get_setting("DEFAULT_DELIVERY_DAYS")
        expected = as_date(record.ordered_at) + timedelta(days=delivery_days)

        return CalendarEvent(
            id=f"delivery-{record.id}",
            title=f"Delivery: {record.material_name}",
            description=(
                f"Supplier: {record.provider or 'not specified'}"
                f" · {record.quantity} {record.unit}"
            ),
            date=expected.isoformat(),
            category=self.category,
            event_type=EventType.EXPECTED_DELIVERY,
            source_id=str(record.id),
            metadata={
                "priority": record.priority,
                "provider": record.provider,
                "project_number": record.project_number,
            },
            visible_roles=frozenset(self.visible_roles),
        )


# ══════════════════════════════════════════════════════════════
# QUOTING
# ══════════════════════════════════════════════════════════════


class FollowUpEventSource(BaseEventSource):
    """Reminder to chase sent quotes that got no answer."""

    name = "follow_ups"
    category = EventCategory.QUOTING

    def __init__(self, today: date | None = None):
        self.today = today

    def fetch(self):
        return get_quote_backend().sent_quotes()

    def transform(self, record: QuoteRecord) -> CalendarEvent | None:
        if str(record.status).lower() != "sent" or not record.created_at:
            return None

        today = self.today or timezone.localdate()
        follow_up = as_date(record.created_at) + timedelta(
            days=get_setting("FOLLOW_UP_DAYS")
        )
        oldest_shown = today - timedelta(days=get_setting("FOLLOW_UP_GRACE_DAYS"))
        if follow_up < oldest_shown:
            return None

        return CalendarEvent(
            id=f"follow-up-{record.id}",
            title=f"Follow up {record.quote_number}",
            description=f"Quote sent without reply · {float(record.total or 0):.2f}",
            date=follow_up.isoformat(),
            category=self.category,
            event_type=EventType.QUOTE_FOLLOW_UP,
            source_id=str(record.id),
            metadata={
                "quote_number": record.quote_number,
                "total": float(record.total or 0),
                "client_name": record.client_name or None,
            },
            visible_roles=frozenset(self.visible_roles),
        )
