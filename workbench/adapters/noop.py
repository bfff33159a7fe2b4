"""
Noop backends -- return no records.

Use these adapters when the purchasing or quoting apps are not installed.
The calendar simply shows no delivery or follow-up events.

Configuration:
    WORKBENCH = {
        "PURCHASE_BACKEND": "workbench.adapters.noop.NoopPurchaseBackend",
        "QUOTE_BACKEND": "workbench.adapters.noop.NoopQuoteBackend",
    }
"""

from __future__ import annotations

from workbench.protocols.records import PurchaseRecord, QuoteRecord


class NoopPurchaseBackend:
    """No-operation implementation of the PurchaseBackend protocol."""

    def ordered_items(self) -> list[PurchaseRecord]:
        return []


class NoopQuoteBackend:
    """No-operation implementation of the QuoteBackend protocol."""

    def sent_quotes(self) -> list[QuoteRecord]:
        return []
