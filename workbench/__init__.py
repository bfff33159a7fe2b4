"""
Django Workbench - Workshop scheduling and calendar engine.

Decides when a pending work item fits on the shared production calendar,
how much daily labor capacity is already committed, and merges production,
purchasing, quoting and manual records into one role-filtered calendar.

Usage:
    from workbench import SuggestionEngine, CalendarAggregator

    suggestions = SuggestionEngine().propose(item, WorkItem.objects.committed())
    if not suggestions:
        ...  # ask for manual dates

    best = suggestions[0]
    item.schedule(best.start_date, best.end_date, user=request.user)

    calendar = CalendarAggregator()
    events = calendar.filter_by_role(calendar.get_all_events(), "operator")
    today = calendar.events_for_day(events, "2025-03-03")
"""

from workbench.exceptions import WorkbenchError


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name == "SuggestionEngine":
        from workbench.services.suggestions import SuggestionEngine

        return SuggestionEngine
    if name == "CalendarAggregator":
        from workbench.services.calendar import CalendarAggregator

        return CalendarAggregator
    if name == "ScheduleSuggestion":
        from workbench.results import ScheduleSuggestion

        return ScheduleSuggestion
    if name == "CapacityWindow":
        from workbench.results import CapacityWindow

        return CapacityWindow
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "SuggestionEngine",
    "CalendarAggregator",
    "ScheduleSuggestion",
    "CapacityWindow",
    "WorkbenchError",
]
__version__ = "0.1.0"
