"""
Workbench Adapters.

Implementations of the roster, purchase, quote and event-source protocols.
Model-backed adapters import their models lazily, so importing this package
does not require the app registry to be ready.
"""

from workbench.adapters.noop import NoopPurchaseBackend, NoopQuoteBackend
from workbench.adapters.roster import ModelRosterBackend
from workbench.adapters.sources import (
    DeliveryEventSource,
    FollowUpEventSource,
    ManualEventSource,
    ProductionEventSource,
)

__all__ = [
    "ModelRosterBackend",
    "NoopPurchaseBackend",
    "NoopQuoteBackend",
    # Calendar sources
    "ManualEventSource",
    "ProductionEventSource",
    "DeliveryEventSource",
    "FollowUpEventSource",
]
