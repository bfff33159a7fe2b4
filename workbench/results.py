"""
Workbench Result Types.

Structured results for capacity and schedule-suggestion operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class DailyCapacity:
    """Aggregate labor available per working day."""

    employee_count: int
    daily_hours: int
    fallback: bool = False


@dataclass(frozen=True)
class CapacityDay:
    """Load of one working day if the candidate item were placed on it."""

    date: date
    total_hours: float
    committed_hours: float
    projected_hours: float
    free_hours: float
    utilization_pct: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "total_hours": self.total_hours,
            "committed_hours": round(self.committed_hours, 2),
            "projected_hours": round(self.projected_hours, 2),
            "free_hours": round(self.free_hours, 2),
            "utilization_pct": self.utilization_pct,
        }


@dataclass
class CapacityWindow:
    """
    Working days a candidate schedule would occupy, with daily utilization.

    can_fit: every day has at least the item's per-day share free
    has_capacity: every day has some free hours
    """

    start_date: date
    end_date: date
    working_days: int
    daily_capacity: float
    employee_count: int
    peak_utilization: int
    avg_utilization: int
    can_fit: bool
    has_capacity: bool
    days: list[CapacityDay] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "working_days": self.working_days,
            "daily_capacity": self.daily_capacity,
            "employee_count": self.employee_count,
            "peak_utilization": self.peak_utilization,
            "avg_utilization": self.avg_utilization,
            "can_fit": self.can_fit,
            "has_capacity": self.has_capacity,
            "days": [day.as_dict() for day in self.days],
        }


@dataclass
class ScheduleSuggestion:
    """
    Candidate start/end window for a work item.

    Suggestions returned together are sorted by score (descending), ties by
    earliest start date.
    """

    start_date: date
    end_date: date
    score: int
    reason: str
    week: int = 0
    conflicting_items: list = field(default_factory=list)
    capacity: CapacityWindow | None = None

    @property
    def has_conflicts(self) -> bool:
        return len(self.conflicting_items) > 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "score": self.score,
            "reason": self.reason,
            "week": self.week,
            "has_conflicts": self.has_conflicts,
            "conflicting_items": [
                {
                    "id": item.id,
                    "reference": getattr(item, "reference", ""),
                    "start_date": item.start_date.isoformat(),
                    "end_date": item.end_date.isoformat(),
                }
                for item in self.conflicting_items
            ],
            "capacity": self.capacity.as_dict() if self.capacity else None,
        }
