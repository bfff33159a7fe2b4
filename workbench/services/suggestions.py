"""
Schedule suggestions.

Proposes a short, ranked list of candidate start/end windows for a waiting
work item. This is not an optimiser: it tries one start per week from the
earliest sensible day and lets a human pick.

Usage:
    engine = SuggestionEngine()
    suggestions = engine.propose(item, WorkItem.objects.committed())
    if not suggestions:
        ...  # no duration information, ask for manual dates
"""

import logging
from datetime import date, timedelta
from typing import Iterable

from django.utils import timezone

from workbench.conf import get_setting
from workbench.protocols.roster import RosterEntry
from workbench.results import ScheduleSuggestion
from workbench.services import capacity
from workbench.workdays import next_working_day, working_span_end

logger = logging.getLogger(__name__)


# ── Scoring weights ──

BASE_SCORE = 100
CONFLICT_PENALTY = 20  # per overlapping scheduled item
DISTANCE_PENALTY_PER_DAY = 2  # per calendar day between today and the start
DISTANCE_PENALTY_CAP = 30
READINESS_BONUS = 10  # once for materials, once for design
PRIORITY_BASELINE = 5
PRIORITY_WEIGHT = 5  # per priority point above/below the baseline
MIN_SCORE, MAX_SCORE = 0, 100

# ── Reasons ──

REASON_OPTIMAL = "optimal, no conflicts"
REASON_GOOD = "good, few conflicts"
REASON_ACCEPTABLE = "acceptable, some conflicts"
REASON_CONFLICTS = "{count} conflicts detected"
REASON_DISTANT = "distant date"
REASON_CHECK = "check availability"

DISTANT_WEEK = 3


def find_conflicts(item, start: date, end: date, scheduled_items: Iterable) -> list:
    """Scheduled items whose [start_date, end_date] overlaps [start, end]."""
    conflicts = []
    for other in scheduled_items:
        if other.id == item.id:
            continue
        if not other.start_date or not other.end_date:
            continue
        if other.start_date <= end and other.end_date >= start:
            conflicts.append(other)
    return conflicts


def score_candidate(item, start: date, conflicts: list, today: date) -> int:
    """Integer score in [0, 100]; higher is better."""
    score = BASE_SCORE
    score -= CONFLICT_PENALTY * len(conflicts)

    # Calendar days, not working days
    days_away = max((start - today).days, 0)
    score -= min(days_away * DISTANCE_PENALTY_PER_DAY, DISTANCE_PENALTY_CAP)

    if not item.requires_materials or item.materials_ready:
        score += READINESS_BONUS
    if not item.requires_design or item.design_ready:
        score += READINESS_BONUS

    score += PRIORITY_WEIGHT * (int(item.priority or 0) - PRIORITY_BASELINE)

    return max(MIN_SCORE, min(MAX_SCORE, score))


def classify(score: int, conflicts: list, week: int) -> str:
    """Short human-readable label for a scored candidate."""
    if score >= 90:
        return REASON_OPTIMAL
    if score >= 70:
        return REASON_GOOD
    if score >= 50:
        return REASON_ACCEPTABLE
    if conflicts:
        return REASON_CONFLICTS.format(count=len(conflicts))
    if week >= DISTANT_WEEK:
        return REASON_DISTANT
    return REASON_CHECK


class SuggestionEngine:
    """
    Ranked schedule candidates for one work item.

    Settings (WORKBENCH dict) are read at construction; keyword arguments
    override them for a single engine.
    """

    def __init__(
        self,
        margin_days: int | None = None,
        design_margin_days: int | None = None,
        weeks: int | None = None,
        attach_capacity: bool | None = None,
    ):
        self.margin_days = (
            margin_days if margin_days is not None
            else get_setting("MATERIALS_MARGIN_DAYS")
        )
        self.design_margin_days = (
            design_margin_days if design_margin_days is not None
            else get_setting("DESIGN_MARGIN_DAYS")
        )
        self.weeks = weeks if weeks is not None else get_setting("CANDIDATE_WEEKS")
        self.attach_capacity = (
            attach_capacity if attach_capacity is not None
            else get_setting("ATTACH_CAPACITY")
        )

    def earliest_start(self, item, today: date) -> date:
        """Today, pushed back by the safety margins for missing materials/design."""
        cursor = today
        if item.requires_materials and not item.materials_ready:
            cursor += timedelta(days=self.margin_days)
        if item.requires_design and not item.design_ready and self.design_margin_days:
            cursor += timedelta(days=self.design_margin_days)
        return cursor

    def propose(
        self,
        item,
        scheduled_items: Iterable,
        roster: Iterable[RosterEntry] | None = None,
        today: date | None = None,
    ) -> list[ScheduleSuggestion]:
        """
        Candidate windows for `item`, best first.

        Args:
            item: Work item to place (WorkItem or compatible record)
            scheduled_items: Items already holding calendar days
            roster: Roster entries for capacity; the roster backend is used if None
            today: Reference day (defaults to timezone.localdate())

        Returns:
            Suggestions sorted by score (desc), then start date. Empty when the
            item has no duration information.
        """
        today = today or timezone.localdate()
        scheduled = [other for other in scheduled_items if other.id != item.id]

        if not item.total_days and item.total_hours is None:
            logger.info(
                f"No suggestions for {item}: missing duration",
                extra={"work_item": item.id},
            )
            return []

        duration = capacity.needed_days(item)
        if duration <= 0:
            logger.info(
                f"No suggestions for {item}: zero duration",
                extra={"work_item": item.id},
            )
            return []

        daily = None
        if self.attach_capacity:
            daily = (
                capacity.daily_capacity(roster)
                if roster is not None
                else capacity.roster_capacity()
            )

        cursor = self.earliest_start(item, today)
        suggestions = []

        for week in range(self.weeks):
            start = next_working_day(cursor + timedelta(weeks=week))
            end = working_span_end(start, duration)

            conflicts = find_conflicts(item, start, end, scheduled)
            score = score_candidate(item, start, conflicts, today)

            window = None
            if daily is not None:
                window = capacity.build_capacity_window(
                    start, item, scheduled, daily.daily_hours, daily.employee_count
                )

            suggestions.append(
                ScheduleSuggestion(
                    start_date=start,
                    end_date=end,
                    score=score,
                    reason=classify(score, conflicts, week),
                    week=week,
                    conflicting_items=conflicts,
                    capacity=window,
                )
            )

        suggestions.sort(key=lambda s: (-s.score, s.start_date))

        logger.info(
            f"Proposed {len(suggestions)} windows for {item}",
            extra={
                "work_item": item.id,
                "best_score": suggestions[0].score if suggestions else None,
            },
        )

        return suggestions
