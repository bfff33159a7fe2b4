"""
Model roster backend.

Reads the workbench Employee table.

Configuration (default):
    WORKBENCH = {
        "ROSTER_BACKEND": "workbench.adapters.roster.ModelRosterBackend",
    }
"""

from __future__ import annotations

from workbench.protocols.roster import RosterEntry


class ModelRosterBackend:
    """RosterBackend implementation over workbench.Employee."""

    def get_roster(self) -> list[RosterEntry]:
        from workbench.models import Employee

        return [
            RosterEntry(
                active=employee.is_active,
                weekly_hours=employee.weekly_hours,
                role=employee.role,
                name=employee.name,
            )
            for employee in Employee.objects.all()
        ]
