"""
Purchase and quote protocols: interfaces to other workshop domains.

Purchasing and quoting live in their own apps. Workbench only needs a
read-only view of their records to project delivery and follow-up events
onto the calendar.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class PurchaseRecord:
    """Purchase line as exposed by the purchasing app."""

    id: str
    material_name: str
    status: str  # pending, ordered, received, cancelled
    ordered_at: date | datetime | None = None
    delivery_days: int | None = None
    provider: str | None = None
    quantity: Decimal | float = 1
    unit: str = "ud"
    priority: int = 5
    project_number: str | None = None


@dataclass(frozen=True)
class QuoteRecord:
    """Quote header as exposed by the quoting app."""

    id: str
    quote_number: str
    status: str  # draft, sent, accepted, rejected
    created_at: date | datetime | None = None
    total: Decimal | float = 0
    client_name: str = ""


@runtime_checkable
class PurchaseBackend(Protocol):
    """Protocol for reading purchase lines."""

    def ordered_items(self) -> list[PurchaseRecord]:
        """
        Return purchase lines that may produce a delivery event.

        Implementations may return lines in any state; the delivery source
        filters out everything that is not ordered.
        """
        ...


@runtime_checkable
class QuoteBackend(Protocol):
    """Protocol for reading quotes."""

    def sent_quotes(self) -> list[QuoteRecord]:
        """
        Return quotes that may need a follow-up reminder.

        Implementations may return quotes in any state; the follow-up source
        filters out everything that is not sent.
        """
        ...
