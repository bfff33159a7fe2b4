"""
Workbench Settings.

Supports two formats (dict takes priority):

    # Option 1: Dict
    WORKBENCH = {
        "MATERIALS_MARGIN_DAYS": 3,
        "SHOP_FLOOR_ROLES": ["operator", "shop_supervisor"],
    }

    # Option 2: Flat
    WORKBENCH_MATERIALS_MARGIN_DAYS = 3

All settings have defaults; no configuration is required.
"""

import threading

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string


ALL_ROLES = ["admin", "manager", "shop_supervisor", "purchasing", "operator"]


# ── Defaults ──

DEFAULTS = {
    # Suggestions
    "MATERIALS_MARGIN_DAYS": 2,
    "DESIGN_MARGIN_DAYS": 0,
    "CANDIDATE_WEEKS": 4,
    "ATTACH_CAPACITY": True,
    # Capacity
    "FALLBACK_EMPLOYEE_COUNT": 3,
    "FALLBACK_DAILY_HOURS": 24,
    "DEFAULT_WEEKLY_HOURS": 40,
    "SHOP_FLOOR_ROLES": ["operator", "shop_supervisor"],
    # Backends
    "ROSTER_BACKEND": "workbench.adapters.roster.ModelRosterBackend",
    "PURCHASE_BACKEND": "workbench.adapters.noop.NoopPurchaseBackend",
    "QUOTE_BACKEND": "workbench.adapters.noop.NoopQuoteBackend",
    # Calendar
    "EVENT_SOURCES": [
        "workbench.adapters.sources.ManualEventSource",
        "workbench.adapters.sources.ProductionEventSource",
        "workbench.adapters.sources.DeliveryEventSource",
        "workbench.adapters.sources.FollowUpEventSource",
    ],
    "DEFAULT_DELIVERY_DAYS": 7,
    "FOLLOW_UP_DAYS": 5,
    "FOLLOW_UP_GRACE_DAYS": 7,
    "ROLES_BY_CATEGORY": {
        "production": ["admin", "manager", "shop_supervisor", "operator"],
        "client_vehicle": ["admin", "manager", "purchasing"],
        "purchasing": ["admin", "manager", "purchasing"],
        "quoting": ["admin", "manager"],
        "general": ALL_ROLES,
    },
}


# ── Accessors ──

_sentinel = object()


def get_setting(name, default=_sentinel):
    """
    Get a workbench setting.

    Looks up in order:
    1. WORKBENCH dict (e.g. WORKBENCH = {"CANDIDATE_WEEKS": 6})
    2. Flat setting (e.g. WORKBENCH_CANDIDATE_WEEKS = 6)
    3. DEFAULTS
    """
    workbench_dict = getattr(settings, "WORKBENCH", {})
    if name in workbench_dict:
        return workbench_dict[name]

    flat_value = getattr(settings, f"WORKBENCH_{name}", _sentinel)
    if flat_value is not _sentinel:
        return flat_value

    if default is not _sentinel:
        return default

    return DEFAULTS.get(name)


def roles_for_category(category: str) -> list[str]:
    """Default visible roles for events of a category."""
    roles_by_category = get_setting("ROLES_BY_CATEGORY")
    return list(roles_by_category.get(category) or ALL_ROLES)


# ── Backends ──

_backend_lock = threading.Lock()
_backend_instances: dict[str, object] = {}


def _load_backend(setting_name: str):
    """
    Instantiate the class configured under `setting_name`, once per process.

    Raises:
        ImproperlyConfigured: If the setting is empty or the import fails
    """
    instance = _backend_instances.get(setting_name)
    if instance is not None:
        return instance

    with _backend_lock:
        if setting_name not in _backend_instances:  # double-checked
            path = get_setting(setting_name)
            if not path:
                raise ImproperlyConfigured(
                    f"WORKBENCH['{setting_name}'] must be configured."
                )
            try:
                _backend_instances[setting_name] = import_string(path)()
            except ImportError as e:
                raise ImproperlyConfigured(
                    f"Failed to import {setting_name} '{path}': {e}"
                ) from e

    return _backend_instances[setting_name]


def get_roster_backend():
    """Return the configured RosterBackend instance."""
    return _load_backend("ROSTER_BACKEND")


def get_purchase_backend():
    """Return the configured PurchaseBackend instance."""
    return _load_backend("PURCHASE_BACKEND")


def get_quote_backend():
    """Return the configured QuoteBackend instance."""
    return _load_backend("QUOTE_BACKEND")


def get_event_sources() -> list:
    """
    Instantiate the registered calendar event sources, in registry order.

    A fresh list is built on every call.
    """
    sources = []
    for path in get_setting("EVENT_SOURCES") or []:
        try:
            sources.append(import_string(path)())
        except ImportError as e:
            raise ImproperlyConfigured(
                f"Failed to import event source '{path}': {e}"
            ) from e
    return sources


def reset_backends() -> None:
    """Reset cached backend singletons (for tests)."""
    with _backend_lock:
        _backend_instances.clear()
