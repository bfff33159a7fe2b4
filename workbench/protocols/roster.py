"""
Roster protocol: interface to workforce data.

Workbench defines this protocol. HR/staff systems implement it to provide
the active workforce used to compute daily labor capacity.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class RosterEntry:
    """One employee as seen by the capacity model."""

    active: bool
    weekly_hours: Decimal | float | None
    role: str
    name: str = ""


@runtime_checkable
class RosterBackend(Protocol):
    """
    Protocol for querying the workforce roster.

    Implementations may raise on lookup failures; the capacity model treats
    any exception as an unavailable roster and applies the fallback.
    """

    def get_roster(self) -> list[RosterEntry]:
        """
        Return every roster entry (active or not).

        Returns:
            List of RosterEntry
        """
        ...
