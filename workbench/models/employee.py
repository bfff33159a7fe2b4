"""
Employee model.

Minimal roster used by the default RosterBackend. Projects with their own
HR app can point WORKBENCH["ROSTER_BACKEND"] elsewhere and ignore it.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Employee(models.Model):
    """Workshop employee contributing labor hours."""

    name = models.CharField(max_length=200, verbose_name=_("Name"))
    role = models.CharField(
        max_length=50,
        db_index=True,
        verbose_name=_("Role"),
        help_text=_("Role identifier, e.g. 'operator' or 'shop_supervisor'"),
    )
    weekly_hours = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("40"),
        validators=[MinValueValidator(0)],
        verbose_name=_("Weekly hours"),
    )
    is_active = models.BooleanField(default=True, verbose_name=_("Active"))

    class Meta:
        db_table = "workbench_employee"
        verbose_name = _("Employee")
        verbose_name_plural = _("Employees")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"
