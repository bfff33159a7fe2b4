"""
WorkItem model.

WorkItem = schedulable unit of production work (one vehicle conversion,
one furniture job...) waiting for or holding a slot on the shop calendar.
"""

import logging
import uuid
from datetime import date

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords

from workbench.exceptions import WorkbenchError
from workbench.workdays import is_weekend

logger = logging.getLogger(__name__)


class WorkItemStatus(models.TextChoices):
    """WorkItem lifecycle status."""

    WAITING = "waiting", _("Waiting")
    SCHEDULED = "scheduled", _("Scheduled")
    IN_PROGRESS = "in_progress", _("In progress")
    COMPLETED = "completed", _("Completed")
    ON_HOLD = "on_hold", _("On hold")


COMMITTED_STATUSES = [WorkItemStatus.SCHEDULED, WorkItemStatus.IN_PROGRESS]


class WorkItemQuerySet(models.QuerySet):
    def waiting(self):
        """Items waiting for a slot, most urgent first."""
        return self.filter(status=WorkItemStatus.WAITING).order_by(
            "-priority", "created_at"
        )

    def committed(self):
        """Items holding calendar days (scheduled or in progress, with dates)."""
        return self.filter(
            status__in=COMMITTED_STATUSES,
            start_date__isnull=False,
            end_date__isnull=False,
        ).order_by("start_date")


class WorkItem(models.Model):
    """
    Schedulable unit of production work.

    Status: WAITING → SCHEDULED → IN_PROGRESS → COMPLETED
            SCHEDULED/ON_HOLD → WAITING (release, dates cleared)

    Only schedule() and release() belong to the scheduling engine;
    IN_PROGRESS/COMPLETED are set by the shop-floor workflow.
    """

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )

    # Identification
    reference = models.CharField(
        max_length=50,
        blank=True,
        db_index=True,
        verbose_name=_("Reference"),
        help_text=_("Quote number this work comes from"),
    )
    client_name = models.CharField(
        max_length=200,
        blank=True,
        verbose_name=_("Client"),
    )
    vehicle_model = models.CharField(
        max_length=200,
        blank=True,
        verbose_name=_("Vehicle model"),
    )

    # Duration
    total_hours = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        verbose_name=_("Total hours"),
        help_text=_("Estimated labor hours"),
    )
    total_days = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        verbose_name=_("Total working days"),
        help_text=_("Leave empty to derive from hours (8 h per day)"),
    )

    status = models.CharField(
        max_length=20,
        choices=WorkItemStatus.choices,
        default=WorkItemStatus.WAITING,
        db_index=True,
        verbose_name=_("Status"),
    )
    priority = models.PositiveSmallIntegerField(
        default=5,
        validators=[MinValueValidator(0), MaxValueValidator(10)],
        verbose_name=_("Priority"),
        help_text=_("0-10, higher is more urgent"),
    )

    # Readiness
    requires_materials = models.BooleanField(default=False, verbose_name=_("Requires materials"))
    materials_ready = models.BooleanField(default=False, verbose_name=_("Materials ready"))
    requires_design = models.BooleanField(default=False, verbose_name=_("Requires design"))
    design_ready = models.BooleanField(default=False, verbose_name=_("Design ready"))

    # Schedule
    start_date = models.DateField(null=True, blank=True, db_index=True, verbose_name=_("Start"))
    end_date = models.DateField(null=True, blank=True, verbose_name=_("End"))

    notes = models.TextField(blank=True, verbose_name=_("Notes"))

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("Updated at"))

    history = HistoricalRecords()

    objects = WorkItemQuerySet.as_manager()

    class Meta:
        db_table = "workbench_work_item"
        verbose_name = _("Work item")
        verbose_name_plural = _("Work items")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "start_date"], name="workbench_wi_status_start_idx"),
        ]

    def __str__(self) -> str:
        label = self.reference or f"WI-{self.pk}"
        if self.client_name:
            return f"{label} - {self.client_name}"
        return label

    @property
    def duration_days(self) -> int:
        """Working days the item needs; see services.capacity.needed_days."""
        from workbench.services.capacity import needed_days

        return needed_days(self)

    @property
    def is_ready(self) -> bool:
        materials_ok = not self.requires_materials or self.materials_ready
        design_ok = not self.requires_design or self.design_ready
        return materials_ok and design_ok

    # ══════════════════════════════════════════════════════════════
    # SCHEDULING
    # ══════════════════════════════════════════════════════════════

    def schedule(self, start_date: date, end_date: date, user=None):
        """
        Commit the item to a date range (usually an accepted suggestion).

        Raises:
            WorkbenchError: INVALID_STATUS if not waiting/on hold,
                INVALID_DATES if the range is reversed or starts/ends on a weekend
        """
        if self.status not in (WorkItemStatus.WAITING, WorkItemStatus.ON_HOLD):
            raise WorkbenchError(
                "INVALID_STATUS",
                current=self.status,
                expected=WorkItemStatus.WAITING,
            )

        if not start_date or not end_date or end_date < start_date:
            raise WorkbenchError(
                "INVALID_DATES", start_date=str(start_date), end_date=str(end_date)
            )

        if is_weekend(start_date) or is_weekend(end_date):
            raise WorkbenchError(
                "INVALID_DATES",
                start_date=str(start_date),
                end_date=str(end_date),
                reason="weekend",
            )

        self.start_date = start_date
        self.end_date = end_date
        self.status = WorkItemStatus.SCHEDULED
        self.save(update_fields=["start_date", "end_date", "status", "updated_at"])

        logger.info(
            f"WorkItem {self} scheduled {start_date} → {end_date}",
            extra={
                "work_item": self.pk,
                "start_date": str(start_date),
                "end_date": str(end_date),
                "user": user.username if user else None,
            },
        )

        from workbench.signals import work_item_scheduled

        work_item_scheduled.send(
            sender=self.__class__,
            work_item=self,
            start_date=start_date,
            end_date=end_date,
            user=user,
        )

    def release(self, reason: str = "", user=None):
        """
        Give the slot back: status returns to WAITING and dates are cleared.

        Raises:
            WorkbenchError: INVALID_STATUS if the item is already completed or waiting
        """
        if self.status not in (
            WorkItemStatus.SCHEDULED,
            WorkItemStatus.IN_PROGRESS,
            WorkItemStatus.ON_HOLD,
        ):
            raise WorkbenchError(
                "INVALID_STATUS",
                current=self.status,
                expected=WorkItemStatus.SCHEDULED,
            )

        self.start_date = None
        self.end_date = None
        self.status = WorkItemStatus.WAITING
        self.save(update_fields=["start_date", "end_date", "status", "updated_at"])

        logger.info(
            f"WorkItem {self} released",
            extra={
                "work_item": self.pk,
                "reason": reason,
                "user": user.username if user else None,
            },
        )

        from workbench.signals import work_item_released

        work_item_released.send(
            sender=self.__class__, work_item=self, reason=reason, user=user
        )
