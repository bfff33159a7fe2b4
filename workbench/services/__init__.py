"""
Workbench Services.

Planning logic that doesn't belong in models:
- capacity: Daily labor capacity and per-day utilization windows
- suggestions: Ranked start/end candidates for waiting work items
- calendar: Unified, role-filtered calendar across event sources
"""

from workbench.services import capacity
from workbench.services.calendar import CalendarAggregator
from workbench.services.suggestions import SuggestionEngine

__all__ = [
    "capacity",
    "CalendarAggregator",
    "SuggestionEngine",
]
