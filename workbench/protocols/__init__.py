"""
Workbench Protocols.

Defines interfaces for external integrations.
"""

from workbench.protocols.calendar import (
    EVENT_TYPES_BY_CATEGORY,
    CalendarEvent,
    EventCategory,
    EventSource,
    EventType,
    default_event_type,
)
from workbench.protocols.records import (
    PurchaseBackend,
    PurchaseRecord,
    QuoteBackend,
    QuoteRecord,
)
from workbench.protocols.roster import RosterBackend, RosterEntry

__all__ = [
    # Calendar
    "CalendarEvent",
    "EventCategory",
    "EventType",
    "EventSource",
    "EVENT_TYPES_BY_CATEGORY",
    "default_event_type",
    # Roster Protocol
    "RosterBackend",
    "RosterEntry",
    # Purchase / Quote Protocols
    "PurchaseBackend",
    "PurchaseRecord",
    "QuoteBackend",
    "QuoteRecord",
]
